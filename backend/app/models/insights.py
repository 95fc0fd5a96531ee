"""Insights models - aggregate statistics derived from the trip collection."""

from pydantic import BaseModel

from backend.app.models.common import TripPurpose
from backend.app.models.trip import Trip


class FavoriteDestination(BaseModel):
    """Destination ranked by how often it was visited."""

    city: str
    country: str
    visit_count: int


class MonthlyTrips(BaseModel):
    """Number of trips starting in a month (e.g. "June 2025")."""

    month: str
    trips: int


class PurposeShare(BaseModel):
    """Share of trips taken for a purpose, in percent."""

    purpose: TripPurpose
    percentage: float


class TravelPatterns(BaseModel):
    """Distribution rollups."""

    monthly_distribution: list[MonthlyTrips]
    purpose_distribution: list[PurposeShare]
    average_trip_duration: float


class TravelInsights(BaseModel):
    """Aggregate statistics; recomputed on demand and never stored."""

    total_trips: int
    total_days: int
    total_spent: float
    currency: str
    favorite_destinations: list[FavoriteDestination]
    travel_patterns: TravelPatterns
    upcoming_trips: list[Trip]
    recent_trips: list[Trip]
