"""
Dependency injection and service container for FastAPI application.
"""
from functools import lru_cache

from fastapi import Depends, Request

from ..storage import build_repositories
from ..utils.exceptions import MarketplaceError, UnauthenticatedError
from ..utils.logger import setup_logger
from .config import settings
from .services.auth_service import AuthService
from .services.booking_service import BookingService
from .services.container import ServiceContainer, build_services
from .services.listing_service import ListingService
from config.settings import app_config


_logger = None


def get_logger():
    """Get application logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logger("fastapi_app", settings.log_level)
    return _logger


@lru_cache(maxsize=1)
def get_services() -> ServiceContainer:
    """Build the service container once per process."""
    repositories = build_repositories(app_config)
    seed = app_config.seed_demo_data and app_config.storage_backend == "memory"
    return build_services(repositories, config=app_config, seed=seed, logger=get_logger())


def get_listing_service(services: ServiceContainer = Depends(get_services)) -> ListingService:
    return services.listing_service


def get_booking_service(services: ServiceContainer = Depends(get_services)) -> BookingService:
    return services.booking_service


def get_auth_service(services: ServiceContainer = Depends(get_services)) -> AuthService:
    return services.auth_service


def get_current_user_id(request: Request) -> str:
    """User id decoded from the bearer token by the auth middleware."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise UnauthenticatedError("Not authenticated")
    return user_id


def internal_error(message: str, error_code: str, e: Exception, **context) -> MarketplaceError:
    """Wrap an unexpected failure so it renders as a 500 error envelope."""
    get_logger().error(error_code.lower(), error=str(e), **context)
    return MarketplaceError(message, {"error": str(e)}, error_code=error_code)


def reset_services() -> None:
    """Drop cached services so the next request rebuilds them."""
    get_services.cache_clear()
