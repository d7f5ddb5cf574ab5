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

    All settings are accessed via the global `settings` instance, or via
    `get_settings()` where a fresh lookup is not wanted.
    """

    # -------------------------------------------------------------------------
    # Store Configuration (Supabase)
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    USERS_TABLE: str = Field(
        default="users",
        min_length=1,
        description="Table holding the user records"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    APP_NAME: str = Field(
        default="User Directory API",
        description="Name reported by the root endpoint"
    )

    APP_VERSION: str = Field(
        default="1.0.0",
        description="Version reported by the root endpoint"
    )

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

    API_BASE_URL: str = Field(
        default="http://localhost:5000",
        description="Base URL the client console talks to"
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3001,http://localhost:8080,http://frontend:80",
        description="Allowed CORS origins (comma-separated)"
    )

    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Apply the per-client request limit"
    )

    RATE_LIMIT_REQUESTS: int = Field(
        default=100,
        ge=1,
        description="Requests allowed per client in one window"
    )

    RATE_LIMIT_WINDOW_SECONDS: int = Field(
        default=15 * 60,
        ge=1,
        description="Length of the rate limit window in seconds"
    )

    RATE_LIMIT_TRUST_FORWARDED: bool = Field(
        default=False,
        description="Key the rate limit on X-Forwarded-For (only behind a trusted proxy)"
    )

    SECURITY_HEADERS_ENABLED: bool = Field(
        default=True,
        description="Add security headers to every response"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (env vars set directly in containers)
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

        Example: "http://localhost:3001, http://frontend:80" -> ["http://localhost:3001", "http://frontend:80"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

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
