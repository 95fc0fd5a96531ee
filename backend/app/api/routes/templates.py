"""Template endpoints - register templates and instantiate trips from them."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from backend.app.api.deps import get_store
from backend.app.api.errors import to_http_error
from backend.app.models.template import TemplateCreate, TravelTemplate, TripFromTemplate
from backend.app.models.trip import Trip
from backend.app.store.errors import TripStoreError
from backend.app.store.trip_store import TripStore

router = APIRouter(prefix="/templates", tags=["templates"])

Store = Annotated[TripStore, Depends(get_store)]


@router.get("", response_model=list[TravelTemplate])
async def list_templates(store: Store) -> list[TravelTemplate]:
    return store.list_templates()


@router.post("", response_model=TravelTemplate, status_code=status.HTTP_201_CREATED)
async def create_template(request: TemplateCreate, store: Store) -> TravelTemplate:
    try:
        return store.add_template(request)
    except TripStoreError as e:
        raise to_http_error(e) from e


@router.post("/{template_id}/trips", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def create_trip_from_template(
    template_id: str, request: TripFromTemplate, store: Store
) -> Trip:
    """Create a planning trip whose destinations and checklist come from the template."""
    try:
        return store.create_trip_from_template(template_id, request)
    except TripStoreError as e:
        raise to_http_error(e) from e
