"""
Main FastAPI application factory.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import get_logger, get_services
from .routes import auth, bookings, health, listings
from .models import ErrorResponse
from .security.jwt import verify_token
from ..utils.exceptions import MarketplaceError, UnauthenticatedError


def _error_response(status_code: int, message: str, error_code: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            success=False,
            message=message,
            error_code=error_code,
            details=details or None,
        ).model_dump()
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger = get_logger()
    logger.info("app_starting", environment=settings.environment, api_version=settings.api_version)

    try:
        services = get_services()
        logger.info("services_initialized", listings=len(services.repositories.listings.list()))
    except Exception as e:
        logger.error("services_init_failed", error=str(e))
        raise

    yield

    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    logger = get_logger()
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        """Map service errors to the error envelope with their status code."""
        return _error_response(exc.status_code, exc.message, exc.error_code, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            422, "Invalid request", "VALIDATION_ERROR",
            {"errors": jsonable_encoder(exc.errors())},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
        return _error_response(500, "Internal server error", "INTERNAL_ERROR", {"error": str(exc)})

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        """Decode an optional bearer token into ``request.state.user_id``."""
        request.state.user_id = None
        auth_header = request.headers.get("Authorization", "")
        if request.method == "OPTIONS" or not auth_header:
            return await call_next(request)

        if not auth_header.startswith("Bearer "):
            return _error_response(401, "Unauthorized", UnauthenticatedError.error_code)
        token = auth_header.split(" ", 1)[1]
        try:
            payload = verify_token(token)
        except ValueError as e:
            return _error_response(401, "Invalid token", UnauthenticatedError.error_code, {"error": str(e)})
        request.state.user_id = payload.get("sub")
        return await call_next(request)

    # Include routers with versioning
    for module in (listings, bookings, auth, health):
        app.include_router(module.router, prefix=settings.versioned_prefix)

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Rental Marketplace API is running",
            "version": settings.app_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app
