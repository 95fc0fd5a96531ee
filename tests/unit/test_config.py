"""Tests for settings and store wiring."""

import pytest

from backend.app.adapters.backend import InMemoryTripBackend
from backend.app.adapters.http import HttpTripBackend
from backend.app.api.deps import create_backend_from_settings
from backend.app.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.upcoming_trips_limit == 5
    assert settings.favorite_destinations_limit == 10
    assert settings.due_soon_days == 3
    assert settings.default_currency == "USD"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPCOMING_TRIPS_LIMIT", "3")
    monkeypatch.setenv("CURRENT_USER", "alex")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.upcoming_trips_limit == 3
    assert settings.current_user == "alex"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_backend_selection() -> None:
    in_memory = create_backend_from_settings(
        Settings(trips_backend_url=None, _env_file=None)  # type: ignore[call-arg]
    )
    remote = create_backend_from_settings(
        Settings(trips_backend_url="https://trips.example.test", _env_file=None)  # type: ignore[call-arg]
    )

    assert isinstance(in_memory, InMemoryTripBackend)
    assert isinstance(remote, HttpTripBackend)


@pytest.mark.asyncio
async def test_seeded_backend_has_sample_trips() -> None:
    backend = create_backend_from_settings(
        Settings(trips_backend_url=None, seed_fixtures=True, _env_file=None)  # type: ignore[call-arg]
    )
    assert len(await backend.load_trips()) == 4
