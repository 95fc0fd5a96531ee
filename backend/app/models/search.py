"""Search models - trip query, filters and ordering."""

from enum import Enum

from pydantic import BaseModel, Field

from backend.app.models.common import TripPurpose, TripStatus, UtcDatetime


class DateRange(BaseModel):
    """Inclusive date range."""

    start: UtcDatetime
    end: UtcDatetime


class BudgetRange(BaseModel):
    """Inclusive budget total range."""

    min: float
    max: float


class TravelFilters(BaseModel):
    """Structured filters; every filter that is set must match."""

    status: list[TripStatus] = Field(default_factory=list)
    purpose: list[TripPurpose] = Field(default_factory=list)
    date_range: DateRange | None = None
    destinations: list[str] = Field(default_factory=list)
    budget_range: BudgetRange | None = None
    travelers: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class TripSortField(str, Enum):
    """Sortable trip fields."""

    start_date = "start_date"
    end_date = "end_date"
    title = "title"
    purpose = "purpose"
    budget = "budget"
    created_at = "created_at"


class SortOrder(str, Enum):
    """Sort direction."""

    asc = "asc"
    desc = "desc"


class TravelSearchQuery(BaseModel):
    """Free-text search plus filters, ordering and pagination."""

    query: str | None = None
    filters: TravelFilters | None = None
    sort_by: TripSortField | None = None
    sort_order: SortOrder = SortOrder.asc
    limit: int | None = Field(None, ge=0)
    offset: int = Field(0, ge=0)
