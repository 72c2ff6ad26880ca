"""
Wiring of repositories into the marketplace services.
"""
from dataclasses import dataclass
from typing import Optional

from .auth_service import AuthService
from .booking_service import BookingService
from .listing_service import ListingService
from ...data.seed import seed_repositories
from ...storage import InMemoryRepository, Repositories
from ...utils.logger import get_logger
from config.settings import app_config


@dataclass
class ServiceContainer:
    """The services sharing one set of repositories."""
    repositories: Repositories
    auth_service: AuthService
    listing_service: ListingService
    booking_service: BookingService


def in_memory_repositories(config=app_config) -> Repositories:
    return Repositories(
        listings=InMemoryRepository(config.listings_collection),
        bookings=InMemoryRepository(config.bookings_collection),
        users=InMemoryRepository(config.users_collection),
        reviews=InMemoryRepository(config.reviews_collection),
    )


def build_services(
    repositories: Optional[Repositories] = None,
    config=app_config,
    seed: bool = False,
    logger=None,
) -> ServiceContainer:
    """
    Build the auth, listing and booking services over shared repositories.

    Args:
        repositories: Storage to use; fresh in-memory repositories when omitted
        config: AppConfig
        seed: Load the demo users, listings, bookings and reviews
        logger: Optional shared logger

    Returns:
        ServiceContainer
    """
    repositories = repositories or in_memory_repositories(config)
    auth_service = AuthService(repositories.users, logger=logger or get_logger("auth_service"))
    listing_service = ListingService(repositories, logger=logger, config=config)
    booking_service = BookingService(repositories, listing_service, logger=logger, config=config)

    if seed:
        seed_repositories(repositories, auth_service.encrypt)

    return ServiceContainer(
        repositories=repositories,
        auth_service=auth_service,
        listing_service=listing_service,
        booking_service=booking_service,
    )
