"""Trip models - the root planning record and the entities it owns."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.checklist import ChecklistItem
from backend.app.models.common import (
    AccommodationType,
    ApprovalStatus,
    BookingStatus,
    ExpenseCategory,
    TransportationType,
    TravelerRole,
    TripPurpose,
    TripStatus,
    UtcDatetime,
    Visibility,
)


class LocaleInfo(BaseModel):
    """Practical local information for a destination."""

    model_config = ConfigDict(frozen=True)

    timezone: str
    currency: str
    language: str
    emergency_numbers: list[str] = Field(default_factory=list)


class DestinationActivity(BaseModel):
    """Planned activity at a destination."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    location: str | None = None
    notes: str | None = None


class Destination(BaseModel):
    """Stop on a trip.

    The arrival/departure window should fall within the trip window. This is
    not enforced; it is reported as an advisory violation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    city: str
    country: str
    region: str | None = None
    arrival_date: UtcDatetime
    departure_date: UtcDatetime
    purpose: str = ""
    notes: str | None = None
    activities: list[DestinationActivity] = Field(default_factory=list)
    local_contacts: list[str] = Field(default_factory=list)
    planned_meetings: list[str] = Field(default_factory=list)
    important_info: LocaleInfo | None = None


class DestinationCreate(BaseModel):
    """Destination payload; an id is assigned when missing."""

    id: str | None = None
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    region: str | None = None
    arrival_date: UtcDatetime
    departure_date: UtcDatetime
    purpose: str = ""
    notes: str | None = None
    activities: list[DestinationActivity] = Field(default_factory=list)
    local_contacts: list[str] = Field(default_factory=list)
    planned_meetings: list[str] = Field(default_factory=list)
    important_info: LocaleInfo | None = None


class DestinationUpdate(BaseModel):
    """Partial destination update."""

    city: str | None = None
    country: str | None = None
    region: str | None = None
    arrival_date: UtcDatetime | None = None
    departure_date: UtcDatetime | None = None
    purpose: str | None = None
    notes: str | None = None
    local_contacts: list[str] | None = None
    planned_meetings: list[str] | None = None
    important_info: LocaleInfo | None = None


class Traveler(BaseModel):
    """Person travelling on a trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    contact_id: str | None = None
    email: str | None = None
    phone: str | None = None
    role: TravelerRole = TravelerRole.companion


class TravelerCreate(BaseModel):
    """Traveler payload; an id is assigned when missing."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    contact_id: str | None = None
    email: str | None = None
    phone: str | None = None
    role: TravelerRole = TravelerRole.companion


class BudgetBreakdown(BaseModel):
    """Fixed-shape budget breakdown; every key is always present."""

    model_config = ConfigDict(frozen=True)

    transportation: float = Field(0.0, ge=0)
    accommodation: float = Field(0.0, ge=0)
    meals: float = Field(0.0, ge=0)
    entertainment: float = Field(0.0, ge=0)
    business: float = Field(0.0, ge=0)
    miscellaneous: float = Field(0.0, ge=0)

    @property
    def total(self) -> float:
        return float(
            self.transportation
            + self.accommodation
            + self.meals
            + self.entertainment
            + self.business
            + self.miscellaneous
        )


class Budget(BaseModel):
    """Trip budget. Breakdown sum should equal total; a mismatch is only advisory."""

    model_config = ConfigDict(frozen=True)

    total: float = Field(..., ge=0)
    currency: str = "USD"
    breakdown: BudgetBreakdown = Field(default_factory=BudgetBreakdown)
    expense_tracking: bool = False
    approved_amount: float | None = None
    spent_amount: float = 0.0

    @property
    def remaining_amount(self) -> float:
        return float(self.total - self.spent_amount)


class Expense(BaseModel):
    """Actual recorded spend on a trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: ExpenseCategory
    amount: float = Field(..., ge=0)
    currency: str = "USD"
    description: str
    date: UtcDatetime
    location: str | None = None
    reimbursable: bool = False
    approval_status: ApprovalStatus = ApprovalStatus.pending
    notes: str | None = None


class ExpenseCreate(BaseModel):
    """Expense payload (id is generated by the store)."""

    category: ExpenseCategory
    amount: float = Field(..., ge=0)
    currency: str = "USD"
    description: str
    date: UtcDatetime
    location: str | None = None
    reimbursable: bool = False
    approval_status: ApprovalStatus = ApprovalStatus.pending
    notes: str | None = None


class ExpenseUpdate(BaseModel):
    """Partial expense update."""

    category: ExpenseCategory | None = None
    amount: float | None = Field(None, ge=0)
    description: str | None = None
    location: str | None = None
    reimbursable: bool | None = None
    approval_status: ApprovalStatus | None = None
    notes: str | None = None


class Transportation(BaseModel):
    """Booked travel leg. duration is in minutes and derived from the times."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: TransportationType
    provider: str
    booking_reference: str | None = None
    departure_location: str
    arrival_location: str
    departure_time: UtcDatetime
    arrival_time: UtcDatetime
    duration: int
    cost: float | None = Field(None, ge=0)
    currency: str | None = None
    seat_number: str | None = None
    notes: str | None = None
    confirmation_status: BookingStatus = BookingStatus.pending
    booking_url: str | None = None


class TransportationCreate(BaseModel):
    """Transportation payload (id and duration are computed by the store)."""

    type: TransportationType
    provider: str = Field(..., min_length=1)
    booking_reference: str | None = None
    departure_location: str = Field(..., min_length=1)
    arrival_location: str = Field(..., min_length=1)
    departure_time: UtcDatetime
    arrival_time: UtcDatetime
    cost: float | None = Field(None, ge=0)
    currency: str | None = None
    seat_number: str | None = None
    notes: str | None = None
    confirmation_status: BookingStatus = BookingStatus.pending
    booking_url: str | None = None


class TransportationUpdate(BaseModel):
    """Partial transportation update."""

    type: TransportationType | None = None
    provider: str | None = None
    booking_reference: str | None = None
    departure_location: str | None = None
    arrival_location: str | None = None
    departure_time: UtcDatetime | None = None
    arrival_time: UtcDatetime | None = None
    cost: float | None = Field(None, ge=0)
    currency: str | None = None
    seat_number: str | None = None
    notes: str | None = None
    confirmation_status: BookingStatus | None = None
    booking_url: str | None = None


class AccommodationContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    phone: str | None = None
    email: str | None = None


class Accommodation(BaseModel):
    """Lodging booked for a trip; nights is derived from the stay window."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: AccommodationType
    name: str
    address: str
    check_in_date: UtcDatetime
    check_out_date: UtcDatetime
    nights: int
    cost: float | None = Field(None, ge=0)
    currency: str | None = None
    booking_reference: str | None = None
    contact_info: AccommodationContact | None = None
    amenities: list[str] = Field(default_factory=list)
    notes: str | None = None
    confirmation_status: BookingStatus = BookingStatus.pending
    booking_url: str | None = None


class AccommodationCreate(BaseModel):
    """Accommodation payload (id and nights are computed by the store)."""

    type: AccommodationType = AccommodationType.hotel
    name: str = Field(..., min_length=1)
    address: str
    check_in_date: UtcDatetime
    check_out_date: UtcDatetime
    cost: float | None = Field(None, ge=0)
    currency: str | None = None
    booking_reference: str | None = None
    contact_info: AccommodationContact | None = None
    amenities: list[str] = Field(default_factory=list)
    notes: str | None = None
    confirmation_status: BookingStatus = BookingStatus.pending
    booking_url: str | None = None


class Trip(BaseModel):
    """Top-level planning record.

    Instances are immutable; every store mutation produces a new Trip value.
    related_meetings/related_contacts/related_tasks hold ids owned by other
    stores and are never dereferenced here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    purpose: TripPurpose
    status: TripStatus = TripStatus.planning

    start_date: UtcDatetime
    end_date: UtcDatetime
    duration: int
    timezone: str = "UTC"
    current_location: str | None = None

    destinations: list[Destination] = Field(default_factory=list)
    travelers: list[Traveler] = Field(default_factory=list)
    budget: Budget | None = None
    transportation: list[Transportation] = Field(default_factory=list)
    accommodation: list[Accommodation] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)

    related_meetings: list[str] = Field(default_factory=list)
    related_contacts: list[str] = Field(default_factory=list)
    related_tasks: list[str] = Field(default_factory=list)

    created_by: str = "current-user"
    created_at: UtcDatetime
    updated_at: UtcDatetime
    is_archived: bool = False
    tags: list[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.private

    @property
    def total_spent(self) -> float:
        """Sum of recorded expense amounts (not the budget)."""
        return float(sum(expense.amount for expense in self.expenses))


class TripCreate(BaseModel):
    """Input for the planning workflow.

    Date ordering is validated by the store so that a rejected creation is
    reported through the store's error slot.
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    purpose: TripPurpose = TripPurpose.business
    start_date: UtcDatetime
    end_date: UtcDatetime
    timezone: str | None = None
    current_location: str | None = None
    destinations: list[DestinationCreate] = Field(default_factory=list)
    travelers: list[TravelerCreate] = Field(default_factory=list)
    budget: Budget | None = None
    related_meetings: list[str] = Field(default_factory=list)
    related_contacts: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.private


class TripUpdate(BaseModel):
    """Partial trip update; only fields explicitly set are merged.

    Destinations, checklist, travelers, expenses, transportation and
    accommodation have dedicated operations.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    purpose: TripPurpose | None = None
    status: TripStatus | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    timezone: str | None = None
    current_location: str | None = None
    budget: Budget | None = None
    related_meetings: list[str] | None = None
    related_contacts: list[str] | None = None
    related_tasks: list[str] | None = None
    is_archived: bool | None = None
    tags: list[str] | None = None
    visibility: Visibility | None = None
