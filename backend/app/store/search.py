"""Trip search: free text, structured filters, ordering and pagination."""

from collections.abc import Sequence
from typing import Any

from backend.app.models.search import SortOrder, TravelFilters, TravelSearchQuery, TripSortField
from backend.app.models.trip import Trip


def _matches_text(trip: Trip, term: str) -> bool:
    if term in trip.title.lower():
        return True
    if trip.description and term in trip.description.lower():
        return True
    return any(
        term in destination.city.lower() or term in destination.country.lower()
        for destination in trip.destinations
    )


def _matches_filters(trip: Trip, filters: TravelFilters) -> bool:
    if filters.status and trip.status not in filters.status:
        return False
    if filters.purpose and trip.purpose not in filters.purpose:
        return False
    if filters.date_range is not None:
        # Containment, not overlap: the whole trip must sit inside the range
        if trip.start_date < filters.date_range.start or trip.end_date > filters.date_range.end:
            return False
    if filters.destinations:
        wanted = [name.lower() for name in filters.destinations]
        if not any(
            name in destination.city.lower() or name in destination.country.lower()
            for destination in trip.destinations
            for name in wanted
        ):
            return False
    if filters.budget_range is not None:
        if trip.budget is None:
            return False
        if not filters.budget_range.min <= trip.budget.total <= filters.budget_range.max:
            return False
    if filters.travelers:
        if not any(
            traveler.id in filters.travelers or (traveler.contact_id or "") in filters.travelers
            for traveler in trip.travelers
        ):
            return False
    if filters.tags and not set(trip.tags) & set(filters.tags):
        return False
    return True


def _sort_key(field: TripSortField) -> Any:
    if field == TripSortField.start_date:
        return lambda trip: trip.start_date
    if field == TripSortField.end_date:
        return lambda trip: trip.end_date
    if field == TripSortField.title:
        return lambda trip: trip.title.lower()
    if field == TripSortField.purpose:
        return lambda trip: trip.purpose.value
    if field == TripSortField.budget:
        return lambda trip: trip.budget.total if trip.budget else 0.0
    return lambda trip: trip.created_at


def search_trips(trips: Sequence[Trip], query: TravelSearchQuery) -> list[Trip]:
    """Run a search over non-archived trips."""
    results = [trip for trip in trips if not trip.is_archived]

    if query.query:
        term = query.query.lower()
        results = [trip for trip in results if _matches_text(trip, term)]

    if query.filters is not None:
        results = [trip for trip in results if _matches_filters(trip, query.filters)]

    if query.sort_by is not None:
        results.sort(key=_sort_key(query.sort_by), reverse=query.sort_order == SortOrder.desc)

    if query.limit is not None:
        results = results[query.offset : query.offset + query.limit]

    return results
