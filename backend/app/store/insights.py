"""Aggregate travel statistics over the trip collection."""

from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from backend.app.models.common import TripStatus
from backend.app.models.insights import (
    FavoriteDestination,
    MonthlyTrips,
    PurposeShare,
    TravelInsights,
    TravelPatterns,
)
from backend.app.models.trip import Trip


def select_upcoming_trips(trips: Sequence[Trip], now: datetime, limit: int) -> list[Trip]:
    """Future, non-cancelled, non-archived trips ordered by start date."""
    upcoming = [
        trip
        for trip in trips
        if trip.start_date > now and trip.status != TripStatus.cancelled and not trip.is_archived
    ]
    upcoming.sort(key=lambda trip: trip.start_date)
    return upcoming[:limit]


def select_active_trips(trips: Sequence[Trip], now: datetime) -> list[Trip]:
    """Trips under way right now and marked in progress."""
    return [
        trip
        for trip in trips
        if trip.start_date <= now <= trip.end_date
        and trip.status == TripStatus.in_progress
        and not trip.is_archived
    ]


def trips_in_range(trips: Sequence[Trip], start: datetime, end: datetime) -> list[Trip]:
    """Trips overlapping [start, end].

    A trip [a, b] matches when it starts inside the window, ends inside the
    window, or spans the whole window.
    """
    return [
        trip
        for trip in trips
        if (start <= trip.start_date <= end)
        or (start <= trip.end_date <= end)
        or (trip.start_date <= start and trip.end_date >= end)
    ]


def rank_favorite_destinations(trips: Sequence[Trip], limit: int) -> list[FavoriteDestination]:
    """Count visits per (city, country); most visited first, ties in first-seen order."""
    counts: Counter[tuple[str, str]] = Counter()
    for trip in trips:
        for destination in trip.destinations:
            counts[(destination.city, destination.country)] += 1

    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    return [
        FavoriteDestination(city=city, country=country, visit_count=count)
        for (city, country), count in ranked[:limit]
    ]


def compute_travel_patterns(trips: Sequence[Trip]) -> TravelPatterns:
    """Monthly and purpose distributions plus average duration."""
    monthly: Counter[str] = Counter(trip.start_date.strftime("%B %Y") for trip in trips)
    purposes = Counter(trip.purpose for trip in trips)
    total = len(trips)

    return TravelPatterns(
        monthly_distribution=[MonthlyTrips(month=month, trips=count) for month, count in monthly.items()],
        purpose_distribution=[
            PurposeShare(purpose=purpose, percentage=count / total * 100)
            for purpose, count in purposes.items()
        ],
        average_trip_duration=sum(trip.duration for trip in trips) / (total or 1),
    )


def compute_insights(
    trips: Sequence[Trip],
    now: datetime,
    *,
    currency: str = "USD",
    favorite_limit: int = 10,
    upcoming_limit: int = 5,
    recent_limit: int = 5,
) -> TravelInsights:
    """Build insights from scratch; nothing here is cached.

    Args:
        trips: Full trip collection
        now: Reference time for the upcoming selection
        currency: Currency label for total_spent
        favorite_limit: Number of favorite destinations to return
        upcoming_limit: Number of upcoming trips to return
        recent_limit: Number of recently completed trips to return

    Returns:
        TravelInsights snapshot
    """
    completed = [trip for trip in trips if trip.status == TripStatus.completed]
    recent = sorted(completed, key=lambda trip: trip.end_date, reverse=True)[:recent_limit]

    return TravelInsights(
        total_trips=len(trips),
        total_days=sum(trip.duration for trip in trips),
        total_spent=sum(trip.total_spent for trip in trips),
        currency=currency,
        favorite_destinations=rank_favorite_destinations(trips, favorite_limit),
        travel_patterns=compute_travel_patterns(trips),
        upcoming_trips=select_upcoming_trips(trips, now, upcoming_limit),
        recent_trips=recent,
    )
