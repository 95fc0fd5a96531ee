"""Template models - reusable trip patterns."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import (
    ChecklistCategory,
    ChecklistPriority,
    TripPurpose,
    UtcDatetime,
)
from backend.app.models.trip import Budget, LocaleInfo


class TemplateDestination(BaseModel):
    """Destination without id or dates; both are filled in from the new trip."""

    model_config = ConfigDict(frozen=True)

    city: str
    country: str
    region: str | None = None
    purpose: str = ""
    notes: str | None = None
    important_info: LocaleInfo | None = None


class TemplateChecklistItem(BaseModel):
    """Checklist entry copied into every trip created from the template."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    category: ChecklistCategory = ChecklistCategory.other
    priority: ChecklistPriority = ChecklistPriority.medium
    notes: str | None = None


class TravelTemplate(BaseModel):
    """Reusable trip pattern."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    purpose: TripPurpose
    destinations: list[TemplateDestination] = Field(default_factory=list)
    default_duration: int = Field(..., gt=0)
    checklist_template: list[TemplateChecklistItem] = Field(default_factory=list)
    budget_template: Budget | None = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    created_by: str
    created_at: UtcDatetime
    usage_count: int = 0


class TemplateCreate(BaseModel):
    """Payload for registering a template."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    purpose: TripPurpose
    destinations: list[TemplateDestination] = Field(default_factory=list)
    default_duration: int = Field(..., gt=0)
    checklist_template: list[TemplateChecklistItem] = Field(default_factory=list)
    budget_template: Budget | None = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class TripFromTemplate(BaseModel):
    """Per-trip values supplied when instantiating a template."""

    title: str = Field(..., min_length=1, max_length=200)
    start_date: UtcDatetime
    end_date: UtcDatetime
