"""Shared pytest fixtures for all test suites."""

from datetime import UTC, datetime

import pytest

from backend.app.adapters.backend import InMemoryTripBackend
from backend.app.adapters.fixtures import build_fixture_trips
from backend.app.config import Settings
from backend.app.store.trip_store import TripStore

FIXED_NOW = datetime(2025, 6, 1, tzinfo=UTC)


def fixed_clock() -> datetime:
    """Clock pinned to 2025-06-01T00:00:00Z."""
    return FIXED_NOW


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(trips_backend_url=None, seed_fixtures=False, _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def backend() -> InMemoryTripBackend:
    """Empty in-memory backend."""
    return InMemoryTripBackend()


@pytest.fixture
def store(backend: InMemoryTripBackend, settings: Settings) -> TripStore:
    """Empty store driven by the fixed clock."""
    return TripStore(backend, clock=fixed_clock, settings=settings)


@pytest.fixture
def seeded_backend() -> InMemoryTripBackend:
    """In-memory backend holding the sample trips."""
    return InMemoryTripBackend(build_fixture_trips(FIXED_NOW))


@pytest.fixture
def seeded_store(seeded_backend: InMemoryTripBackend, settings: Settings) -> TripStore:
    """Store wired to the sample trips (call fetch_trips to load them)."""
    return TripStore(seeded_backend, clock=fixed_clock, settings=settings)


@pytest.fixture
def now() -> datetime:
    """The fixed reference time used by every store in the test suite."""
    return FIXED_NOW
