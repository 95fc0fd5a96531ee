"""Insights endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_store
from backend.app.models.insights import TravelInsights
from backend.app.store.trip_store import TripStore

router = APIRouter()


@router.get("/insights", response_model=TravelInsights)
async def insights(store: Annotated[TripStore, Depends(get_store)]) -> TravelInsights:
    """Totals, favorite destinations and travel patterns over every stored trip."""
    return store.get_insights()
