"""Trip store - owns the trip collection and every derived view.

The store is an explicit state container: construct one per application (or
per test) and inject it where it is needed. Trips are immutable values, and
each mutation swaps in a new collection mapping, so a reader holding a
previous snapshot never observes a half-applied update.

Failures of mutating operations are raised to the caller and also recorded
in the single ``error`` slot, which the next mutating operation clears.
"""

import logging
import math
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, date, datetime, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from backend.app.adapters.backend import InMemoryTripBackend, TripBackend
from backend.app.config import Settings, get_settings
from backend.app.models.checklist import (
    ChecklistItem,
    ChecklistItemCreate,
    ChecklistItemUpdate,
    ChecklistView,
)
from backend.app.models.common import (
    ChecklistCategory,
    ChecklistSortKey,
    CompletionFilter,
    TravelerRole,
    TripStatus,
    as_utc_datetime,
    ensure_utc,
    new_id,
)
from backend.app.models.insights import TravelInsights
from backend.app.models.optimization import TravelOptimization
from backend.app.models.search import TravelSearchQuery
from backend.app.models.template import TemplateCreate, TravelTemplate, TripFromTemplate
from backend.app.models.trip import (
    Accommodation,
    AccommodationCreate,
    Destination,
    DestinationCreate,
    DestinationUpdate,
    Expense,
    ExpenseCreate,
    ExpenseUpdate,
    Transportation,
    TransportationCreate,
    TransportationUpdate,
    Traveler,
    TravelerCreate,
    Trip,
    TripCreate,
    TripUpdate,
)
from backend.app.models.violations import Violation
from backend.app.store import checklist as checklist_views
from backend.app.store.errors import (
    ChecklistItemNotFoundError,
    DestinationNotFoundError,
    ExpenseNotFoundError,
    TemplateNotFoundError,
    TransportationNotFoundError,
    TravelerNotFoundError,
    TripBackendError,
    TripNotFoundError,
    TripStoreError,
    TripValidationError,
)
from backend.app.store.insights import (
    compute_insights,
    select_active_trips,
    select_upcoming_trips,
    trips_in_range,
)
from backend.app.store.optimization import suggest_optimizations
from backend.app.store.search import search_trips
from backend.app.utils.logging import StructuredStoreLogger
from backend.app.utils.metrics import PrometheusStoreMetrics
from backend.app.verification.verifiers import run_verifiers

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def trip_duration(start: datetime, end: datetime) -> int:
    """Whole days between two datetimes, rounded up."""
    return math.ceil((end - start) / timedelta(days=1))


def leg_minutes(departure: datetime, arrival: datetime) -> int:
    """Whole minutes between departure and arrival."""
    return int((arrival - departure) // timedelta(minutes=1))


def _coerce(model: type[M], value: M | Mapping[str, Any]) -> M:
    """Accept either a model instance or a plain mapping of its fields."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise TripValidationError(str(e)) from e


def _merge_fields(target: BaseModel, update: BaseModel) -> dict[str, Any]:
    """Collect fields explicitly set on a partial update.

    An explicit None only clears fields that are optional on the target.
    """
    fields: dict[str, Any] = {}
    for name in update.model_fields_set:
        value = getattr(update, name)
        if value is None and type(target).model_fields[name].default is not None:
            continue
        fields[name] = value
    return fields


class TripStore:
    """In-memory trip/checklist state engine."""

    def __init__(
        self,
        backend: TripBackend | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        settings: Settings | None = None,
        current_user: str | None = None,
        logger: StructuredStoreLogger | None = None,
        metrics: PrometheusStoreMetrics | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            backend: Persistence collaborator used by fetch_trips
            clock: Returns "now"; defaults to the current UTC time
            settings: Limits and defaults (defaults to get_settings())
            current_user: Name of the creating user (defaults to settings.current_user)
            logger: Structured logger (optional)
            metrics: Metrics sink (optional)
        """
        self._settings = settings or get_settings()
        self._backend: TripBackend = backend or InMemoryTripBackend()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._current_user = current_user or self._settings.current_user
        self._logger = logger or StructuredStoreLogger()
        self._metrics = metrics or PrometheusStoreMetrics()

        self._trips: dict[str, Trip] = {}
        # Local edits overlaid on every fetched collection
        self._local: dict[str, Trip] = {}
        self._deleted: set[str] = set()
        self._selected_id: str | None = None
        self._upcoming: list[Trip] = []
        self._active: list[Trip] = []
        self._templates: dict[str, TravelTemplate] = {}
        self._fetch_generation = 0

        self.is_loading = False
        self.error: str | None = None
        self.last_fetch_error: str | None = None

    # State accessors

    @property
    def trips(self) -> list[Trip]:
        """Snapshot of every trip, archived ones included."""
        return list(self._trips.values())

    @property
    def selected_trip(self) -> Trip | None:
        """Currently selected trip, looked up in the collection on every read."""
        if self._selected_id is None:
            return None
        return self._trips.get(self._selected_id)

    @property
    def upcoming_trips(self) -> list[Trip]:
        """Cached upcoming trips as of the last mutation or fetch."""
        return list(self._upcoming)

    @property
    def active_trips(self) -> list[Trip]:
        """Cached active trips as of the last mutation or fetch."""
        return list(self._active)

    @property
    def templates(self) -> list[TravelTemplate]:
        return list(self._templates.values())

    def now(self) -> datetime:
        return ensure_utc(self._clock())

    # Internal helpers

    @contextmanager
    def _operation(self, operation: str, **log_fields: Any) -> Iterator[dict[str, Any]]:
        """Run a mutating operation: reset the error slot, record failures."""
        self.error = None
        try:
            yield log_fields
        except TripStoreError as e:
            self.error = str(e)
            self._logger.log_operation(operation, "error", error_reason=str(e), **log_fields)
            self._metrics.inc_operation(operation, "error")
            raise
        self._logger.log_operation(operation, "success", **log_fields)
        self._metrics.inc_operation(operation, "success")

    def _require(self, trip_id: str) -> Trip:
        trip = self._trips.get(trip_id)
        if trip is None:
            raise TripNotFoundError(trip_id)
        return trip

    def _touch(self, trip: Trip, **changes: Any) -> Trip:
        """New trip value with the changes applied and updated_at bumped."""
        return trip.model_copy(update={**changes, "updated_at": self.now()})

    def _commit(self, trip: Trip) -> None:
        """Swap in a new collection containing the trip and refresh cached views."""
        trips = dict(self._trips)
        trips[trip.id] = trip
        self._trips = trips
        self._local = {**self._local, trip.id: trip}
        self._refresh_views()

    def _refresh_views(self) -> None:
        trips = list(self._trips.values())
        now = self.now()
        self._upcoming = select_upcoming_trips(trips, now, self._settings.upcoming_trips_limit)
        self._active = select_active_trips(trips, now)
        self._metrics.set_trip_count(len(trips))

    def _warn_on_violations(self, trip: Trip) -> list[Violation]:
        violations = run_verifiers(trip)
        if violations:
            self._logger.log_operation(
                "verify_trip",
                "advisory",
                trip_id=trip.id,
                codes=[violation.code for violation in violations],
            )
        return violations

    def _materialize_travelers(self, travelers: list[TravelerCreate]) -> list[Traveler]:
        """Assign ids and make sure the creating user is the primary traveler."""
        materialized = [
            Traveler(**traveler.model_dump(exclude={"id"}), id=traveler.id or new_id())
            for traveler in travelers
        ]
        if not any(traveler.role == TravelerRole.primary for traveler in materialized):
            creator = Traveler(id=new_id(), name=self._current_user, role=TravelerRole.primary)
            materialized.insert(0, creator)
        return materialized

    @staticmethod
    def _destination_from(data: DestinationCreate) -> Destination:
        return Destination(**data.model_dump(exclude={"id"}), id=data.id or new_id())

    def _build_trip(self, data: TripCreate) -> Trip:
        """Validate creation input and build the new trip without storing it."""
        if data.start_date >= data.end_date:
            raise TripValidationError("End date must be after start date")

        now = self.now()
        return Trip(
            id=new_id(),
            title=data.title.strip(),
            description=data.description,
            purpose=data.purpose,
            status=TripStatus.planning,
            start_date=data.start_date,
            end_date=data.end_date,
            duration=trip_duration(data.start_date, data.end_date),
            timezone=data.timezone or self._settings.default_timezone,
            current_location=data.current_location,
            destinations=[self._destination_from(d) for d in data.destinations],
            travelers=self._materialize_travelers(data.travelers),
            budget=data.budget,
            checklist=[],
            related_meetings=list(data.related_meetings),
            related_contacts=list(data.related_contacts),
            created_by=self._current_user,
            created_at=now,
            updated_at=now,
            tags=list(data.tags),
            visibility=data.visibility,
        )

    def _replace_checklist_item(
        self, trip: Trip, item_id: str, replacement: ChecklistItem
    ) -> Trip:
        checklist = [replacement if item.id == item_id else item for item in trip.checklist]
        return self._touch(trip, checklist=checklist)

    @staticmethod
    def _find_item(trip: Trip, item_id: str) -> ChecklistItem:
        for item in trip.checklist:
            if item.id == item_id:
                return item
        raise ChecklistItemNotFoundError(trip.id, item_id)

    # Trip CRUD

    def create_trip(self, data: TripCreate | Mapping[str, Any]) -> Trip:
        """Create a trip in the planning state.

        Raises:
            TripValidationError: If the start date is not strictly before the end date
        """
        with self._operation("create_trip") as log:
            trip = self._build_trip(_coerce(TripCreate, data))
            self._commit(trip)
            log["trip_id"] = trip.id
            self._warn_on_violations(trip)
            return trip

    def update_trip(self, trip_id: str, changes: TripUpdate | Mapping[str, Any]) -> Trip:
        """Merge the explicitly set fields into a trip.

        Archiving through an update clears the selection like archive_trip.

        Raises:
            TripNotFoundError: If no trip has this id
            TripValidationError: If the resulting dates are out of order
        """
        with self._operation("update_trip", trip_id=trip_id):
            update = _coerce(TripUpdate, changes)
            trip = self._require(trip_id)
            fields = _merge_fields(trip, update)

            start = fields.get("start_date", trip.start_date)
            end = fields.get("end_date", trip.end_date)
            if start >= end:
                raise TripValidationError("End date must be after start date")
            if "start_date" in fields or "end_date" in fields:
                fields["duration"] = trip_duration(start, end)

            updated = self._touch(trip, **fields)
            self._commit(updated)
            if fields.get("is_archived") and self._selected_id == trip_id:
                self._selected_id = None
            self._warn_on_violations(updated)
            return updated

    def delete_trip(self, trip_id: str) -> None:
        """Remove a trip; clears the selection when it was selected."""
        with self._operation("delete_trip", trip_id=trip_id):
            self._require(trip_id)
            self._trips = {key: trip for key, trip in self._trips.items() if key != trip_id}
            self._local = {key: trip for key, trip in self._local.items() if key != trip_id}
            self._deleted.add(trip_id)
            if self._selected_id == trip_id:
                self._selected_id = None
            self._refresh_views()

    def archive_trip(self, trip_id: str) -> Trip:
        """Hide a trip from listings, upcoming/active views and search."""
        with self._operation("archive_trip", trip_id=trip_id):
            archived = self._touch(self._require(trip_id), is_archived=True)
            self._commit(archived)
            if self._selected_id == trip_id:
                self._selected_id = None
            return archived

    def update_trip_status(self, trip_id: str, status: TripStatus) -> Trip:
        """Change status; completing a trip marks every checklist item done."""
        with self._operation("update_trip_status", trip_id=trip_id, status=status.value):
            trip = self._require(trip_id)
            changes: dict[str, Any] = {"status": status}
            if status == TripStatus.completed and trip.status != TripStatus.completed:
                changes["checklist"] = [
                    item.model_copy(update={"completed": True}) for item in trip.checklist
                ]
            updated = self._touch(trip, **changes)
            self._commit(updated)
            return updated

    def select_trip(self, trip: Trip | str | None) -> None:
        """Select a trip by value or id, or clear the selection with None."""
        if trip is None:
            self._selected_id = None
            return
        trip_id = trip.id if isinstance(trip, Trip) else trip
        with self._operation("select_trip", trip_id=trip_id):
            self._require(trip_id)
            self._selected_id = trip_id

    # Checklist

    def add_checklist_item(
        self, trip_id: str, item: ChecklistItemCreate | Mapping[str, Any]
    ) -> ChecklistItem:
        """Append a checklist item; completed defaults to False."""
        with self._operation("add_checklist_item", trip_id=trip_id) as log:
            data = _coerce(ChecklistItemCreate, item)
            trip = self._require(trip_id)
            new_item = ChecklistItem(id=new_id(), **data.model_dump())
            self._commit(self._touch(trip, checklist=[*trip.checklist, new_item]))
            log["item_id"] = new_item.id
            return new_item

    def update_checklist_item(
        self,
        trip_id: str,
        item_id: str,
        changes: ChecklistItemUpdate | Mapping[str, Any],
    ) -> ChecklistItem:
        """Merge fields into one checklist item.

        Raises:
            TripNotFoundError: If no trip has this id
            ChecklistItemNotFoundError: If the trip has no such item (checklist unchanged)
        """
        with self._operation("update_checklist_item", trip_id=trip_id, item_id=item_id):
            update = _coerce(ChecklistItemUpdate, changes)
            trip = self._require(trip_id)
            item = self._find_item(trip, item_id)
            updated_item = item.model_copy(update=_merge_fields(item, update))
            self._commit(self._replace_checklist_item(trip, item_id, updated_item))
            return updated_item

    def toggle_checklist_item(self, trip_id: str, item_id: str) -> ChecklistItem:
        """Flip the completed flag of one item."""
        with self._operation("toggle_checklist_item", trip_id=trip_id, item_id=item_id):
            trip = self._require(trip_id)
            item = self._find_item(trip, item_id)
            toggled = item.model_copy(update={"completed": not item.completed})
            self._commit(self._replace_checklist_item(trip, item_id, toggled))
            return toggled

    def remove_checklist_item(self, trip_id: str, item_id: str) -> None:
        """Remove one item from a trip's checklist."""
        with self._operation("remove_checklist_item", trip_id=trip_id, item_id=item_id):
            trip = self._require(trip_id)
            self._find_item(trip, item_id)
            checklist = [item for item in trip.checklist if item.id != item_id]
            self._commit(self._touch(trip, checklist=checklist))

    def seed_default_checklist(self, trip_id: str) -> list[ChecklistItem]:
        """Append the five kickoff items in a single mutation."""
        with self._operation("seed_default_checklist", trip_id=trip_id):
            trip = self._require(trip_id)
            seeded = [
                ChecklistItem(id=new_id(), **data.model_dump())
                for data in checklist_views.default_checklist()
            ]
            self._commit(self._touch(trip, checklist=[*trip.checklist, *seeded]))
            return seeded

    # Linking (weak references; duplicates are the caller's responsibility)

    def link_meeting(self, trip_id: str, meeting_id: str) -> Trip:
        with self._operation("link_meeting", trip_id=trip_id, meeting_id=meeting_id):
            trip = self._require(trip_id)
            updated = self._touch(trip, related_meetings=[*trip.related_meetings, meeting_id])
            self._commit(updated)
            return updated

    def link_contact(self, trip_id: str, contact_id: str) -> Trip:
        with self._operation("link_contact", trip_id=trip_id, contact_id=contact_id):
            trip = self._require(trip_id)
            updated = self._touch(trip, related_contacts=[*trip.related_contacts, contact_id])
            self._commit(updated)
            return updated

    def link_task(self, trip_id: str, task_id: str) -> Trip:
        with self._operation("link_task", trip_id=trip_id, task_id=task_id):
            trip = self._require(trip_id)
            updated = self._touch(trip, related_tasks=[*trip.related_tasks, task_id])
            self._commit(updated)
            return updated

    # Destinations

    def add_destination(
        self, trip_id: str, destination: DestinationCreate | Mapping[str, Any]
    ) -> Destination:
        with self._operation("add_destination", trip_id=trip_id):
            data = _coerce(DestinationCreate, destination)
            trip = self._require(trip_id)
            new_destination = self._destination_from(data)
            updated = self._touch(trip, destinations=[*trip.destinations, new_destination])
            self._commit(updated)
            self._warn_on_violations(updated)
            return new_destination

    def update_destination(
        self,
        trip_id: str,
        destination_id: str,
        changes: DestinationUpdate | Mapping[str, Any],
    ) -> Destination:
        with self._operation("update_destination", trip_id=trip_id):
            update = _coerce(DestinationUpdate, changes)
            trip = self._require(trip_id)
            current = next((d for d in trip.destinations if d.id == destination_id), None)
            if current is None:
                raise DestinationNotFoundError(trip_id, destination_id)
            replacement = current.model_copy(update=_merge_fields(current, update))
            destinations = [
                replacement if d.id == destination_id else d for d in trip.destinations
            ]
            updated = self._touch(trip, destinations=destinations)
            self._commit(updated)
            self._warn_on_violations(updated)
            return replacement

    def remove_destination(self, trip_id: str, destination_id: str) -> None:
        with self._operation("remove_destination", trip_id=trip_id):
            trip = self._require(trip_id)
            if not any(d.id == destination_id for d in trip.destinations):
                raise DestinationNotFoundError(trip_id, destination_id)
            destinations = [d for d in trip.destinations if d.id != destination_id]
            self._commit(self._touch(trip, destinations=destinations))

    # Travelers

    def add_traveler(self, trip_id: str, traveler: TravelerCreate | Mapping[str, Any]) -> Traveler:
        with self._operation("add_traveler", trip_id=trip_id):
            data = _coerce(TravelerCreate, traveler)
            trip = self._require(trip_id)
            new_traveler = Traveler(**data.model_dump(exclude={"id"}), id=data.id or new_id())
            self._commit(self._touch(trip, travelers=[*trip.travelers, new_traveler]))
            return new_traveler

    def remove_traveler(self, trip_id: str, traveler_id: str) -> None:
        with self._operation("remove_traveler", trip_id=trip_id):
            trip = self._require(trip_id)
            if not any(t.id == traveler_id for t in trip.travelers):
                raise TravelerNotFoundError(trip_id, traveler_id)
            travelers = [t for t in trip.travelers if t.id != traveler_id]
            self._commit(self._touch(trip, travelers=travelers))

    # Expenses

    def add_expense(self, trip_id: str, expense: ExpenseCreate | Mapping[str, Any]) -> Expense:
        """Record an expense and keep the budget's spent amount in step."""
        with self._operation("add_expense", trip_id=trip_id):
            data = _coerce(ExpenseCreate, expense)
            trip = self._require(trip_id)
            new_expense = Expense(id=new_id(), **data.model_dump())
            changes: dict[str, Any] = {"expenses": [*trip.expenses, new_expense]}
            if trip.budget is not None:
                changes["budget"] = trip.budget.model_copy(
                    update={"spent_amount": trip.budget.spent_amount + new_expense.amount}
                )
            updated = self._touch(trip, **changes)
            self._commit(updated)
            self._warn_on_violations(updated)
            return new_expense

    def update_expense(
        self,
        trip_id: str,
        expense_id: str,
        changes: ExpenseUpdate | Mapping[str, Any],
    ) -> Expense:
        with self._operation("update_expense", trip_id=trip_id):
            update = _coerce(ExpenseUpdate, changes)
            trip = self._require(trip_id)
            current = next((e for e in trip.expenses if e.id == expense_id), None)
            if current is None:
                raise ExpenseNotFoundError(trip_id, expense_id)
            replacement = current.model_copy(update=_merge_fields(current, update))
            trip_changes: dict[str, Any] = {
                "expenses": [replacement if e.id == expense_id else e for e in trip.expenses]
            }
            if trip.budget is not None and replacement.amount != current.amount:
                spent = trip.budget.spent_amount - current.amount + replacement.amount
                trip_changes["budget"] = trip.budget.model_copy(update={"spent_amount": spent})
            updated = self._touch(trip, **trip_changes)
            self._commit(updated)
            self._warn_on_violations(updated)
            return replacement

    # Transportation and accommodation

    def add_transportation(
        self, trip_id: str, transportation: TransportationCreate | Mapping[str, Any]
    ) -> Transportation:
        """Append a transportation leg; duration is derived in minutes.

        Raises:
            TripValidationError: If arrival is not after departure
        """
        with self._operation("add_transportation", trip_id=trip_id) as log:
            data = _coerce(TransportationCreate, transportation)
            trip = self._require(trip_id)
            if data.departure_time >= data.arrival_time:
                raise TripValidationError("Arrival time must be after departure time")
            leg = Transportation(
                **data.model_dump(),
                id=new_id(),
                duration=leg_minutes(data.departure_time, data.arrival_time),
            )
            self._commit(self._touch(trip, transportation=[*trip.transportation, leg]))
            log["item_id"] = leg.id
            return leg

    def update_transportation(
        self,
        trip_id: str,
        transportation_id: str,
        changes: TransportationUpdate | Mapping[str, Any],
    ) -> Transportation:
        with self._operation("update_transportation", trip_id=trip_id, item_id=transportation_id):
            update = _coerce(TransportationUpdate, changes)
            trip = self._require(trip_id)
            current = next((t for t in trip.transportation if t.id == transportation_id), None)
            if current is None:
                raise TransportationNotFoundError(trip_id, transportation_id)
            fields = _merge_fields(current, update)
            departure = fields.get("departure_time", current.departure_time)
            arrival = fields.get("arrival_time", current.arrival_time)
            if departure >= arrival:
                raise TripValidationError("Arrival time must be after departure time")
            fields["duration"] = leg_minutes(departure, arrival)
            replacement = current.model_copy(update=fields)
            legs = [replacement if t.id == transportation_id else t for t in trip.transportation]
            self._commit(self._touch(trip, transportation=legs))
            return replacement

    def add_accommodation(
        self, trip_id: str, accommodation: AccommodationCreate | Mapping[str, Any]
    ) -> Accommodation:
        """Append a stay; nights is derived from the check-in/check-out window.

        Raises:
            TripValidationError: If check-out is not after check-in
        """
        with self._operation("add_accommodation", trip_id=trip_id) as log:
            data = _coerce(AccommodationCreate, accommodation)
            trip = self._require(trip_id)
            if data.check_in_date >= data.check_out_date:
                raise TripValidationError("Check-out date must be after check-in date")
            stay = Accommodation(
                **data.model_dump(),
                id=new_id(),
                nights=trip_duration(data.check_in_date, data.check_out_date),
            )
            self._commit(self._touch(trip, accommodation=[*trip.accommodation, stay]))
            log["item_id"] = stay.id
            return stay

    def suggest_optimizations(self, trip_id: str) -> TravelOptimization:
        """Rule-based suggestions for one trip; unknown ids are recorded in ``error``."""
        with self._operation("suggest_optimizations", trip_id=trip_id):
            return suggest_optimizations(self._require(trip_id))

    # Templates

    def add_template(self, template: TemplateCreate | Mapping[str, Any]) -> TravelTemplate:
        with self._operation("add_template") as log:
            data = _coerce(TemplateCreate, template)
            created = TravelTemplate(
                **data.model_dump(),
                id=new_id(),
                created_by=self._current_user,
                created_at=self.now(),
                usage_count=0,
            )
            self._templates = {**self._templates, created.id: created}
            log["template_id"] = created.id
            return created

    def list_templates(self) -> list[TravelTemplate]:
        return self.templates

    def create_trip_from_template(
        self, template_id: str, trip_data: TripFromTemplate | Mapping[str, Any]
    ) -> Trip:
        """Instantiate a template: destinations span the whole trip, checklist starts pending."""
        with self._operation("create_trip_from_template", template_id=template_id) as log:
            data = _coerce(TripFromTemplate, trip_data)
            template = self._templates.get(template_id)
            if template is None:
                raise TemplateNotFoundError(template_id)

            trip = self._build_trip(
                TripCreate(
                    title=data.title,
                    description=template.description,
                    purpose=template.purpose,
                    start_date=data.start_date,
                    end_date=data.end_date,
                    destinations=[
                        DestinationCreate(
                            **destination.model_dump(),
                            arrival_date=data.start_date,
                            departure_date=data.end_date,
                        )
                        for destination in template.destinations
                    ],
                    budget=(
                        template.budget_template.model_copy(update={"spent_amount": 0.0})
                        if template.budget_template
                        else None
                    ),
                    tags=list(template.tags),
                )
            )
            checklist = [
                ChecklistItem(id=new_id(), completed=False, **entry.model_dump())
                for entry in template.checklist_template
            ]
            trip = trip.model_copy(update={"checklist": checklist})
            self._commit(trip)
            self._templates = {
                **self._templates,
                template_id: template.model_copy(update={"usage_count": template.usage_count + 1}),
            }
            log["trip_id"] = trip.id
            return trip

    # Queries

    def get_trip(self, trip_id: str) -> Trip | None:
        return self._trips.get(trip_id)

    def require_trip(self, trip_id: str) -> Trip:
        """Like get_trip, but raises TripNotFoundError."""
        return self._require(trip_id)

    def list_trips(self, include_archived: bool = False) -> list[Trip]:
        return [trip for trip in self._trips.values() if include_archived or not trip.is_archived]

    def get_trips_by_status(self, status: TripStatus) -> list[Trip]:
        return [
            trip for trip in self._trips.values() if trip.status == status and not trip.is_archived
        ]

    def get_upcoming_trips(self) -> list[Trip]:
        """Recompute and cache the upcoming trips (future, not cancelled, earliest first)."""
        self._upcoming = select_upcoming_trips(
            list(self._trips.values()), self.now(), self._settings.upcoming_trips_limit
        )
        return list(self._upcoming)

    def get_active_trips(self) -> list[Trip]:
        """Recompute and cache the trips currently in progress."""
        self._active = select_active_trips(list(self._trips.values()), self.now())
        return list(self._active)

    def get_trips_by_date_range(self, start: date | datetime, end: date | datetime) -> list[Trip]:
        """Trips overlapping [start, end]; nothing is cached."""
        return trips_in_range(
            list(self._trips.values()), as_utc_datetime(start), as_utc_datetime(end)
        )

    def search_trips(self, query: TravelSearchQuery | Mapping[str, Any]) -> list[Trip]:
        return search_trips(list(self._trips.values()), _coerce(TravelSearchQuery, query))

    def get_insights(self) -> TravelInsights:
        """Aggregate statistics over the whole collection, computed on demand."""
        return compute_insights(
            list(self._trips.values()),
            self.now(),
            currency=self._settings.default_currency,
            favorite_limit=self._settings.favorite_destinations_limit,
            upcoming_limit=self._settings.upcoming_trips_limit,
            recent_limit=self._settings.recent_trips_limit,
        )

    def verify_trip(self, trip_id: str) -> list[Violation]:
        return run_verifiers(self._require(trip_id))

    # Per-trip checklist views

    def checklist_progress(self, trip_id: str) -> float:
        return checklist_views.calculate_progress(self._require(trip_id).checklist)

    def get_overdue_tasks(self, trip_id: str) -> list[ChecklistItem]:
        return checklist_views.get_overdue_tasks(self._require(trip_id).checklist, self.now())

    def get_due_soon_tasks(self, trip_id: str) -> list[ChecklistItem]:
        return checklist_views.get_due_soon_tasks(
            self._require(trip_id).checklist, self.now(), self._settings.due_soon_days
        )

    def checklist_view(
        self,
        trip_id: str,
        *,
        category: ChecklistCategory | str = "all",
        completion: CompletionFilter = CompletionFilter.all,
        sort_by: ChecklistSortKey = ChecklistSortKey.priority,
    ) -> ChecklistView:
        return checklist_views.build_checklist_view(
            self._require(trip_id).checklist,
            self.now(),
            category=category,
            completion=completion,
            sort_by=sort_by,
            due_soon_days=self._settings.due_soon_days,
        )

    # Persistence

    async def fetch_trips(self) -> None:
        """Reload the collection from the backend.

        Local edits win over fetched values: trips created or changed through
        this store are kept, and trips deleted here stay deleted even when
        the backend still returns them.

        Failures are recorded in ``error`` and ``last_fetch_error`` rather
        than raised; the caller retries by calling again. When fetches
        overlap, only the most recently started one is applied.
        """
        self._fetch_generation += 1
        generation = self._fetch_generation
        self.is_loading = True
        self.error = None
        started = time.perf_counter()
        trips: list[Trip] = []
        reason: str | None = None

        try:
            trips = await self._backend.load_trips()
        except TripBackendError as e:
            reason = str(e)
        except Exception as e:
            reason = f"Failed to fetch trips: {type(e).__name__}"
            logger.error(f"[fetch_trips] unexpected backend failure: {e}", exc_info=True)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            current = generation == self._fetch_generation
            if current:
                self.is_loading = False

        outcome = "success" if reason is None else "error"
        self._metrics.record_fetch_latency(outcome, elapsed_ms)
        if not current:
            self._logger.log_operation("fetch_trips", "stale", latency_ms=elapsed_ms)
            return

        self._metrics.inc_operation("fetch_trips", outcome)
        self.last_fetch_error = reason
        if reason is not None:
            self.error = reason
            self._logger.log_operation(
                "fetch_trips", "error", latency_ms=elapsed_ms, error_reason=reason
            )
            return

        merged = {trip.id: trip for trip in trips if trip.id not in self._deleted}
        merged.update(self._local)
        self._trips = merged
        self._refresh_views()
        self._logger.log_operation(
            "fetch_trips", "success", latency_ms=elapsed_ms, trip_count=len(merged)
        )

    # Utility

    def clear_error(self) -> None:
        self.error = None

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading
