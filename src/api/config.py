"""
Configuration settings for FastAPI application.
"""
from pydantic_settings import BaseSettings
from pydantic import Field

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:3000"]


class FastAPISettings(BaseSettings):
    """FastAPI application settings with environment variable loading."""

    # Application settings
    app_name: str = Field(default="Rental Marketplace API", description="Application name")
    app_description: str = Field(default="API for short-term rental listings and bookings", description="Application description")
    app_version: str = Field(default="1.0.0", description="Application version")

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8001, description="Server port")
    environment: str = Field(default="development", description="Environment (development, staging, production)")

    # API settings
    api_version: str = Field(default="v1", description="API version")
    api_prefix: str = Field(default="/api", description="API prefix")

    # Security settings
    cors_origins: str = Field(
        default="",
        description="Comma-separated allowed CORS origins",
        validation_alias="CORS_ORIGINS"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {"extra": "ignore"}  # Allow extra fields from existing .env

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins from the comma-separated setting or return the default."""
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or list(DEFAULT_CORS_ORIGINS)

    @property
    def versioned_prefix(self) -> str:
        return f"{self.api_prefix}/{self.api_version}"


# Global settings instance
settings = FastAPISettings()
