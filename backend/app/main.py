"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.app.api.deps import create_store_from_settings
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.insights import router as insights_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.templates import router as templates_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.config import get_settings
from backend.app.store.trip_store import TripStore


def create_app(store: TripStore | None = None) -> FastAPI:
    """Build the application around a store (one is created from settings if omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Initial load; failures land in store.error and are reported by /healthz
        await app.state.store.fetch_trips()
        yield

    app = FastAPI(title="Trip Tracker API", version="0.1.0", lifespan=lifespan)
    app.state.store = store or create_store_from_settings(get_settings())

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(trips_router)
    app.include_router(templates_router)
    app.include_router(insights_router, tags=["insights"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Trip Tracker API", "version": "0.1.0"}

    return app


app = create_app()
