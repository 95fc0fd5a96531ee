"""Checklist models - trackable tasks belonging to a trip."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import ChecklistCategory, ChecklistPriority, UtcDatetime


class ChecklistItem(BaseModel):
    """Single checklist task. The id is unique within its trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    category: ChecklistCategory = ChecklistCategory.other
    priority: ChecklistPriority = ChecklistPriority.medium
    completed: bool = False
    due_date: UtcDatetime | None = None
    notes: str | None = None
    assigned_to: str | None = None
    depends_on: list[str] = Field(default_factory=list)


class ChecklistItemCreate(BaseModel):
    """Payload for a new checklist item (id is generated by the store)."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    category: ChecklistCategory = ChecklistCategory.other
    priority: ChecklistPriority = ChecklistPriority.medium
    completed: bool = False
    due_date: UtcDatetime | None = None
    notes: str | None = None
    assigned_to: str | None = None
    depends_on: list[str] = Field(default_factory=list)


class ChecklistItemUpdate(BaseModel):
    """Partial update; only fields explicitly set are merged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category: ChecklistCategory | None = None
    priority: ChecklistPriority | None = None
    completed: bool | None = None
    due_date: UtcDatetime | None = None
    notes: str | None = None
    assigned_to: str | None = None
    depends_on: list[str] | None = None


class ChecklistView(BaseModel):
    """Filtered, sorted and grouped checklist with its progress rollups."""

    progress: float
    items: list[ChecklistItem]
    groups: dict[str, list[ChecklistItem]]
    overdue: list[ChecklistItem]
    due_soon: list[ChecklistItem]
