"""FastAPI dependencies and store wiring."""

from datetime import UTC, datetime

from fastapi import Request

from backend.app.adapters.backend import InMemoryTripBackend, TripBackend
from backend.app.adapters.fixtures import build_fixture_trips
from backend.app.adapters.http import HttpTripBackend
from backend.app.config import Settings
from backend.app.store.trip_store import TripStore


def create_backend_from_settings(settings: Settings) -> TripBackend:
    """Pick the persistence backend.

    A configured trips_backend_url selects the HTTP backend; otherwise trips
    live in memory, optionally seeded with the sample fixtures.
    """
    if settings.trips_backend_url:
        return HttpTripBackend(
            settings.trips_backend_url,
            timeout=settings.backend_timeout_seconds,
        )

    trips = (
        build_fixture_trips(datetime.now(UTC), owner=settings.current_user)
        if settings.seed_fixtures
        else []
    )
    return InMemoryTripBackend(trips, delay_seconds=settings.backend_delay_seconds)


def create_store_from_settings(settings: Settings) -> TripStore:
    """Build the application's store."""
    return TripStore(create_backend_from_settings(settings), settings=settings)


def get_store(request: Request) -> TripStore:
    """Return the store owned by the running application."""
    store: TripStore = request.app.state.store
    return store
