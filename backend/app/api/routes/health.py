"""Health check endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.app.api.deps import get_store
from backend.app.store.trip_store import TripStore

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(store: Annotated[TripStore, Depends(get_store)]) -> dict[str, Any] | JSONResponse:
    """Store health.

    Returns:
        200 with store status when the last load succeeded
        503 when the last load failed; operation errors are reported but
        do not degrade health
    """
    degraded = store.last_fetch_error is not None
    body: dict[str, Any] = {
        "status": "degraded" if degraded else "ok",
        "components": {
            "store": {
                "is_loading": store.is_loading,
                "error": store.error,
                "last_fetch_error": store.last_fetch_error,
                "trips": len(store.trips),
            },
        },
    }

    if degraded:
        return JSONResponse(content=body, status_code=503)

    return body
