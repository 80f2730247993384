"""
Application configuration.

Loads settings from environment variables with sensible defaults.
The signing secret has no default: the app refuses to start without one.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from stockroom.auth.jwt import AuthConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # Database
    # ==========================================================================

    database_url: str = "sqlite:///./stockroom.db"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def auth_config(self) -> AuthConfig:
        """
        Build the immutable signing configuration.

        Raises ConfigurationError when JWT_SECRET is missing.
        """
        return AuthConfig(
            secret=self.jwt_secret,
            algorithm=self.jwt_algorithm,
            token_ttl=timedelta(hours=self.jwt_expire_hours),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
