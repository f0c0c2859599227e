"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str = "dev-jwt-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: str = ""

    # ==========================================================================
    # Item rules
    # ==========================================================================

    max_message_length: int = 1000
    min_message_length: int = 3
    max_user_id_length: int = 50

    max_items_per_user: int = 100
    item_limit_warning_threshold: int = 90
    high_volume_item_count: int = 50
    short_message_length: int = 10

    # Comma-separated, matched case-insensitively
    prohibited_terms: str = "spam"

    business_hours_start: int = 9
    business_hours_end: int = 17

    stale_item_days: int = 30

    # ==========================================================================
    # Listing
    # ==========================================================================

    default_page_size: int = 20
    max_page_size: int = 100
    large_page_warning: int = 50
    default_sort_order: str = "desc"

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
    def prohibited_terms_list(self) -> list[str]:
        return [t.strip().lower() for t in self.prohibited_terms.split(",") if t.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "ITEMKEEPER_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set the root log level from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
