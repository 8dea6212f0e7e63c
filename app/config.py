# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.MONGO_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance, or
    through the AppContext built for each application.
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGO_URI: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    MONGO_DB_NAME: str = Field(
        default="devcamper",
        description="Database name used for all collections"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Security / JWT
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing bearer tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Signing algorithm for bearer tokens"
    )

    JWT_EXPIRE_DAYS: int = Field(
        default=30,
        ge=1,
        description="Days until an issued token expires"
    )

    JWT_COOKIE_EXPIRE_DAYS: int = Field(
        default=30,
        ge=1,
        description="Days until the token cookie expires"
    )

    RESET_TOKEN_EXPIRE_MINUTES: int = Field(
        default=10,
        ge=1,
        description="Minutes a password reset token stays valid"
    )

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    MAX_FILE_UPLOAD: int = Field(
        default=1_000_000,
        ge=1,
        description="Maximum photo upload size in bytes"
    )

    FILE_UPLOAD_PATH: str = Field(
        default="./public/uploads",
        description="Directory where bootcamp photos are written"
    )

    # -------------------------------------------------------------------------
    # Geocoder
    # -------------------------------------------------------------------------

    GEOCODER_API_KEY: str = Field(
        default="",
        description="API key for the geocoding provider"
    )

    GEOCODER_URL: str = Field(
        default="https://www.mapquestapi.com/geocoding/v1/address",
        description="Geocoding endpoint"
    )

    GEOCODER_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Seconds before a geocoding request is abandoned"
    )

    # -------------------------------------------------------------------------
    # Email (password reset)
    # -------------------------------------------------------------------------

    SMTP_HOST: str = Field(
        default="",
        description="SMTP server host; empty logs messages instead of sending"
    )

    SMTP_PORT: int = Field(default=587, ge=1, le=65535)

    SMTP_USERNAME: str = Field(default="")

    SMTP_PASSWORD: str = Field(default="")

    FROM_EMAIL: str = Field(default="noreply@devcamper.io")

    FROM_NAME: str = Field(default="DevCamper")

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
settings = get_settings()
