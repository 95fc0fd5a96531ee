"""Persistence collaborator interface and its in-memory implementation."""

import asyncio
from collections.abc import Iterable
from typing import Protocol

from backend.app.models.trip import Trip
from backend.app.store.errors import TripBackendError


class TripBackend(Protocol):
    """Asynchronous source of the trip collection."""

    async def load_trips(self) -> list[Trip]:
        """Load every stored trip.

        Returns:
            Trips in storage order

        Raises:
            TripBackendError: With a human-readable message on failure
        """
        ...


class InMemoryTripBackend:
    """In-memory implementation of TripBackend with a simulated network delay."""

    def __init__(
        self,
        trips: Iterable[Trip] | None = None,
        *,
        delay_seconds: float = 0.0,
        error: str | None = None,
    ) -> None:
        """Initialize backend.

        Args:
            trips: Initial stored trips
            delay_seconds: Simulated latency for every load
            error: When set, every load fails with this message
        """
        self._trips: list[Trip] = list(trips or [])
        self._delay_seconds = delay_seconds
        self._error = error

    def set_trips(self, trips: Iterable[Trip]) -> None:
        """Replace stored trips."""
        self._trips = list(trips)

    def fail_with(self, error: str | None) -> None:
        """Make subsequent loads fail (or succeed again with None)."""
        self._error = error

    async def load_trips(self) -> list[Trip]:
        """Load stored trips after the configured delay."""
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)

        if self._error is not None:
            raise TripBackendError(self._error)

        return list(self._trips)
