"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Derived views
    upcoming_trips_limit: int = 5
    recent_trips_limit: int = 5
    favorite_destinations_limit: int = 10
    due_soon_days: int = 3

    # Defaults applied at trip creation
    default_currency: str = "USD"
    default_timezone: str = "UTC"
    current_user: str = "current-user"

    # Persistence backend (in-memory when no URL is configured)
    trips_backend_url: str | None = None
    backend_timeout_seconds: float = 4.0
    backend_delay_seconds: float = 0.0
    seed_fixtures: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
