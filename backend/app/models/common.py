"""Common types and enums shared across all models."""

import re
import uuid
from datetime import UTC, date, datetime, time
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def new_id() -> str:
    """Generate an opaque entity identifier."""
    return uuid.uuid4().hex


def _coerce_datetime(value: Any) -> Any:
    """Accept plain dates (and date-only ISO strings) as midnight datetimes."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and _ISO_DATE.fullmatch(value):
        return datetime.combine(date.fromisoformat(value), time.min)
    return value


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC so comparisons never mix naive and aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def as_utc_datetime(value: date | datetime) -> datetime:
    """Normalize a date or datetime into an aware UTC-comparable datetime."""
    return ensure_utc(_coerce_datetime(value))


UtcDatetime = Annotated[datetime, BeforeValidator(_coerce_datetime), AfterValidator(ensure_utc)]


class TripPurpose(str, Enum):
    """Why the trip is being taken."""

    business = "business"
    personal = "personal"
    mixed = "mixed"
    conference = "conference"
    training = "training"
    client_visit = "client_visit"
    vacation = "vacation"
    family = "family"


class TripStatus(str, Enum):
    """Trip lifecycle: planning -> confirmed -> in_progress -> completed, or cancelled."""

    planning = "planning"
    confirmed = "confirmed"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"
    postponed = "postponed"


class Visibility(str, Enum):
    """Who can see a trip."""

    private = "private"
    team = "team"
    public = "public"


class TravelerRole(str, Enum):
    """Role of a traveler on a trip."""

    primary = "primary"
    companion = "companion"
    colleague = "colleague"
    family = "family"


class ChecklistCategory(str, Enum):
    """Checklist item category."""

    documents = "documents"
    packing = "packing"
    booking = "booking"
    health = "health"
    work = "work"
    other = "other"


class ChecklistPriority(str, Enum):
    """Checklist item priority."""

    high = "high"
    medium = "medium"
    low = "low"

    @property
    def rank(self) -> int:
        """Numeric rank used for sorting (high sorts first)."""
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    ChecklistPriority.high: 3,
    ChecklistPriority.medium: 2,
    ChecklistPriority.low: 1,
}


class CompletionFilter(str, Enum):
    """Checklist completion filter."""

    all = "all"
    completed = "completed"
    pending = "pending"


class ChecklistSortKey(str, Enum):
    """Single active sort key for checklist views."""

    priority = "priority"
    category = "category"
    due_date = "due_date"
    title = "title"


class ExpenseCategory(str, Enum):
    """Budget breakdown keys; expenses are filed under one of these."""

    transportation = "transportation"
    accommodation = "accommodation"
    meals = "meals"
    entertainment = "entertainment"
    business = "business"
    miscellaneous = "miscellaneous"


class ApprovalStatus(str, Enum):
    """Expense approval state."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class TransportationType(str, Enum):
    """Mode of a transportation leg."""

    flight = "flight"
    train = "train"
    car = "car"
    bus = "bus"
    ship = "ship"
    other = "other"


class AccommodationType(str, Enum):
    """Kind of lodging."""

    hotel = "hotel"
    apartment = "apartment"
    house = "house"
    hostel = "hostel"
    resort = "resort"
    guest_house = "guest_house"
    other = "other"


class BookingStatus(str, Enum):
    """Confirmation state of a transportation or accommodation booking."""

    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class OptimizationType(str, Enum):
    """Area an optimization suggestion addresses."""

    route = "route"
    timing = "timing"
    cost = "cost"
    meeting = "meeting"


class OptimizationImpact(str, Enum):
    """Expected impact of a suggestion."""

    high = "high"
    medium = "medium"
    low = "low"
