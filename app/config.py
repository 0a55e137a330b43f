# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
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

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key (used for admin sign-in)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Object Storage
    # -------------------------------------------------------------------------

    STORAGE_BUCKET: str = Field(
        default="karmic-images",
        description="Supabase Storage bucket holding product images"
    )

    # -------------------------------------------------------------------------
    # Email Notifications (SendGrid)
    # -------------------------------------------------------------------------

    SENDGRID_API_KEY: str = Field(
        default="",
        description="SendGrid API key; notifications are skipped when empty"
    )

    SENDGRID_API_URL: str = Field(
        default="https://api.sendgrid.com/v3/mail/send",
        description="SendGrid v3 mail send endpoint"
    )

    ADMIN_EMAIL: str = Field(
        default="admin@karmicinternational.com",
        description="Recipient of quotation notifications"
    )

    FROM_EMAIL: str = Field(
        default="noreply@karmicinternational.com",
        description="Sender address for quotation notifications"
    )

    EMAIL_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the email provider call"
    )

    # -------------------------------------------------------------------------
    # Default Admin (scripts/create_admin.py)
    # -------------------------------------------------------------------------

    DEFAULT_ADMIN_EMAIL: str = Field(
        default="admin@karmic.com",
        description="Email of the bootstrap admin user"
    )

    DEFAULT_ADMIN_PASSWORD: str = Field(
        default="",
        description="Password of the bootstrap admin user"
    )

    DEFAULT_ADMIN_USERNAME: str = Field(
        default="admin",
        description="Display username stored in the admin's user metadata"
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
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Product Image Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum size of a single uploaded image in MB"
    )

    MAX_PRODUCT_IMAGES: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of images per product form submission"
    )

    IMAGE_MAX_WIDTH: int = Field(
        default=800,
        ge=1,
        description="Width of the bounding box processed images must fit in"
    )

    IMAGE_MAX_HEIGHT: int = Field(
        default=600,
        ge=1,
        description="Height of the bounding box processed images must fit in"
    )

    IMAGE_QUALITY: int = Field(
        default=80,
        ge=1,
        le=100,
        description="WEBP encoder quality for processed images"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
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

        Example: "http://localhost:5173, https://myapp.com" -> ["http://localhost:5173", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def image_max_size(self) -> tuple[int, int]:
        """Bounding box (width, height) for processed product images."""
        return (self.IMAGE_MAX_WIDTH, self.IMAGE_MAX_HEIGHT)

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
# Usage: from app.config import settings
settings = get_settings()
