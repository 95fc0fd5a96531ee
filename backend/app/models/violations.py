"""Violation models - advisory consistency findings on a trip."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for consistency findings."""

    ADVISORY = "advisory"
    BLOCKING = "blocking"


class ViolationKind(str, Enum):
    """Categories of trip consistency checks."""

    BUDGET = "budget"
    SCHEDULE = "schedule"


class Violation(BaseModel):
    """A consistency finding on a trip.

    Trip findings are surfaced to the caller as warnings; none of them
    prevents a mutation from being applied.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "OVER_BUDGET"
    message: str  # Human-readable description (1-2 sentences)
    severity: ViolationSeverity
    affected_ids: list[str]  # Destination/expense ids the finding refers to
    details: dict[str, JsonValue] = Field(default_factory=dict)
