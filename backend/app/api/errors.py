"""Translate store failures into HTTP errors."""

from fastapi import HTTPException, status

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

_NOT_FOUND = (
    TripNotFoundError,
    ChecklistItemNotFoundError,
    DestinationNotFoundError,
    ExpenseNotFoundError,
    TravelerNotFoundError,
    TransportationNotFoundError,
    TemplateNotFoundError,
)


def to_http_error(error: TripStoreError) -> HTTPException:
    """Map a store exception to an HTTPException with the store's message."""
    if isinstance(error, _NOT_FOUND):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, TripValidationError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, TripBackendError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
