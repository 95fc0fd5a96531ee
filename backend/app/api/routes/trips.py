"""Trip endpoints - CRUD, checklist, linking and derived views."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from backend.app.api.deps import get_store
from backend.app.api.errors import to_http_error
from backend.app.models.checklist import (
    ChecklistItem,
    ChecklistItemCreate,
    ChecklistItemUpdate,
    ChecklistView,
)
from backend.app.models.common import ChecklistSortKey, CompletionFilter, TripStatus
from backend.app.models.optimization import TravelOptimization
from backend.app.models.search import TravelSearchQuery
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
from backend.app.store.errors import TripStoreError
from backend.app.store.trip_store import TripStore

router = APIRouter(prefix="/trips", tags=["trips"])

Store = Annotated[TripStore, Depends(get_store)]


class StatusChangeRequest(BaseModel):
    """Request body for PUT /trips/{trip_id}/status."""

    status: TripStatus


class LinkRequest(BaseModel):
    """Request body for linking a meeting, contact or task by id."""

    id: str = Field(..., min_length=1)


class SelectionRequest(BaseModel):
    """Request body for PUT /trips/selection (null clears the selection)."""

    trip_id: str | None = None


class SelectionResponse(BaseModel):
    """Currently selected trip."""

    trip: Trip | None


class RefreshResponse(BaseModel):
    """Store state after a backend refresh."""

    is_loading: bool
    error: str | None
    trip_count: int


# Collection-level routes (declared before /{trip_id})


@router.get("", response_model=list[Trip])
async def list_trips(
    store: Store,
    include_archived: Annotated[bool, Query()] = False,
) -> list[Trip]:
    """List trips, hiding archived ones unless asked."""
    return store.list_trips(include_archived=include_archived)


@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: TripCreate,
    store: Store,
    seed_checklist: Annotated[bool, Query()] = False,
) -> Trip:
    """Create a trip; optionally seed the default kickoff checklist."""
    try:
        trip = store.create_trip(request)
        if seed_checklist:
            store.seed_default_checklist(trip.id)
            trip = store.require_trip(trip.id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return trip


@router.get("/upcoming", response_model=list[Trip])
async def upcoming_trips(store: Store) -> list[Trip]:
    return store.get_upcoming_trips()


@router.get("/active", response_model=list[Trip])
async def active_trips(store: Store) -> list[Trip]:
    return store.get_active_trips()


@router.get("/range", response_model=list[Trip])
async def trips_by_date_range(
    store: Store,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> list[Trip]:
    """Trips overlapping the inclusive [start, end] window."""
    if end < start:
        raise HTTPException(status_code=422, detail="end must be >= start")
    return store.get_trips_by_date_range(start, end)


@router.post("/search", response_model=list[Trip])
async def search_trips(query: TravelSearchQuery, store: Store) -> list[Trip]:
    return store.search_trips(query)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_trips(store: Store) -> RefreshResponse:
    """Reload from the persistence backend; failures are reported, not raised."""
    await store.fetch_trips()
    return RefreshResponse(
        is_loading=store.is_loading,
        error=store.error,
        trip_count=len(store.trips),
    )


@router.get("/selection", response_model=SelectionResponse)
async def get_selection(store: Store) -> SelectionResponse:
    return SelectionResponse(trip=store.selected_trip)


@router.put("/selection", response_model=SelectionResponse)
async def set_selection(request: SelectionRequest, store: Store) -> SelectionResponse:
    try:
        store.select_trip(request.trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return SelectionResponse(trip=store.selected_trip)


# Single-trip routes


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(trip_id: str, store: Store) -> Trip:
    trip = store.get_trip(trip_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


@router.patch("/{trip_id}", response_model=Trip)
async def update_trip(trip_id: str, request: TripUpdate, store: Store) -> Trip:
    try:
        return store.update_trip(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(trip_id: str, store: Store) -> Response:
    try:
        store.delete_trip(trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/archive", response_model=Trip)
async def archive_trip(trip_id: str, store: Store) -> Trip:
    try:
        return store.archive_trip(trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.put("/{trip_id}/status", response_model=Trip)
async def change_status(trip_id: str, request: StatusChangeRequest, store: Store) -> Trip:
    try:
        return store.update_trip_status(trip_id, request.status)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.get("/{trip_id}/violations", response_model=list[Violation])
async def trip_violations(trip_id: str, store: Store) -> list[Violation]:
    """Advisory consistency findings (budget breakdown, destination dates)."""
    try:
        return store.verify_trip(trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e


# Checklist


@router.get("/{trip_id}/checklist", response_model=ChecklistView)
async def get_checklist(
    trip_id: str,
    store: Store,
    category: Annotated[str, Query()] = "all",
    completion: Annotated[CompletionFilter, Query()] = CompletionFilter.all,
    sort_by: Annotated[ChecklistSortKey, Query()] = ChecklistSortKey.priority,
) -> ChecklistView:
    """Filtered, sorted and grouped checklist with progress and due-date rollups."""
    try:
        return store.checklist_view(
            trip_id, category=category, completion=completion, sort_by=sort_by
        )
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post(
    "/{trip_id}/checklist", response_model=ChecklistItem, status_code=status.HTTP_201_CREATED
)
async def add_checklist_item(
    trip_id: str, request: ChecklistItemCreate, store: Store
) -> ChecklistItem:
    try:
        return store.add_checklist_item(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post(
    "/{trip_id}/checklist/default",
    response_model=list[ChecklistItem],
    status_code=status.HTTP_201_CREATED,
)
async def seed_checklist(trip_id: str, store: Store) -> list[ChecklistItem]:
    try:
        return store.seed_default_checklist(trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.patch("/{trip_id}/checklist/{item_id}", response_model=ChecklistItem)
async def update_checklist_item(
    trip_id: str, item_id: str, request: ChecklistItemUpdate, store: Store
) -> ChecklistItem:
    try:
        return store.update_checklist_item(trip_id, item_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post("/{trip_id}/checklist/{item_id}/toggle", response_model=ChecklistItem)
async def toggle_checklist_item(trip_id: str, item_id: str, store: Store) -> ChecklistItem:
    try:
        return store.toggle_checklist_item(trip_id, item_id)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.delete("/{trip_id}/checklist/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_checklist_item(trip_id: str, item_id: str, store: Store) -> Response:
    try:
        store.remove_checklist_item(trip_id, item_id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Destinations, travelers and expenses


@router.post(
    "/{trip_id}/destinations", response_model=Destination, status_code=status.HTTP_201_CREATED
)
async def add_destination(trip_id: str, request: DestinationCreate, store: Store) -> Destination:
    try:
        return store.add_destination(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.patch("/{trip_id}/destinations/{destination_id}", response_model=Destination)
async def update_destination(
    trip_id: str, destination_id: str, request: DestinationUpdate, store: Store
) -> Destination:
    try:
        return store.update_destination(trip_id, destination_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.delete(
    "/{trip_id}/destinations/{destination_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_destination(trip_id: str, destination_id: str, store: Store) -> Response:
    try:
        store.remove_destination(trip_id, destination_id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/travelers", response_model=Traveler, status_code=status.HTTP_201_CREATED)
async def add_traveler(trip_id: str, request: TravelerCreate, store: Store) -> Traveler:
    try:
        return store.add_traveler(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.delete("/{trip_id}/travelers/{traveler_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_traveler(trip_id: str, traveler_id: str, store: Store) -> Response:
    try:
        store.remove_traveler(trip_id, traveler_id)
    except TripStoreError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/expenses", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def add_expense(trip_id: str, request: ExpenseCreate, store: Store) -> Expense:
    try:
        return store.add_expense(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.patch("/{trip_id}/expenses/{expense_id}", response_model=Expense)
async def update_expense(
    trip_id: str, expense_id: str, request: ExpenseUpdate, store: Store
) -> Expense:
    """Update an expense; the budget's spent amount follows amount changes."""
    try:
        return store.update_expense(trip_id, expense_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


# Transportation, accommodation and optimization


@router.post(
    "/{trip_id}/transportation",
    response_model=Transportation,
    status_code=status.HTTP_201_CREATED,
)
async def add_transportation(
    trip_id: str, request: TransportationCreate, store: Store
) -> Transportation:
    try:
        return store.add_transportation(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.patch("/{trip_id}/transportation/{transportation_id}", response_model=Transportation)
async def update_transportation(
    trip_id: str, transportation_id: str, request: TransportationUpdate, store: Store
) -> Transportation:
    try:
        return store.update_transportation(trip_id, transportation_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post(
    "/{trip_id}/accommodation",
    response_model=Accommodation,
    status_code=status.HTTP_201_CREATED,
)
async def add_accommodation(
    trip_id: str, request: AccommodationCreate, store: Store
) -> Accommodation:
    try:
        return store.add_accommodation(trip_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.get("/{trip_id}/optimizations", response_model=TravelOptimization)
async def suggest_optimizations(trip_id: str, store: Store) -> TravelOptimization:
    """Route, timing and cost suggestions with their summed savings."""
    try:
        return store.suggest_optimizations(trip_id)
    except TripStoreError as e:
        raise to_http_error(e) from e


# Linking


@router.post("/{trip_id}/meetings", response_model=Trip)
async def link_meeting(trip_id: str, request: LinkRequest, store: Store) -> Trip:
    try:
        return store.link_meeting(trip_id, request.id)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post("/{trip_id}/contacts", response_model=Trip)
async def link_contact(trip_id: str, request: LinkRequest, store: Store) -> Trip:
    try:
        return store.link_contact(trip_id, request.id)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post("/{trip_id}/tasks", response_model=Trip)
async def link_task(trip_id: str, request: LinkRequest, store: Store) -> Trip:
    try:
        return store.link_task(trip_id, request.id)
    except TripStoreError as e:
        raise to_http_error(e) from e
