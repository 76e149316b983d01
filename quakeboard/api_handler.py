"""Display API Handler - FastAPI service for the seismic display.

Accepts event snapshots from the external poller and serves render frames
to the browser display surface. Part of the imperative shell - handles
HTTP I/O.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from quakeboard.dashboard import Dashboard


logger = logging.getLogger(__name__)

# CORS allowed origins
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


# ===== Request Models =====

class EarthquakeRecord(BaseModel):
    """One event as served by the seismic backend."""
    id: int | str
    sourceId: str | None = None
    timestamp: str
    latitude: float
    longitude: float
    magnitude: float
    depth: float
    additionalData: dict[str, Any] | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class IngestResponse(BaseModel):
    received: int
    accepted: int
    rejected: int


def create_app(dashboard: Dashboard) -> FastAPI:
    """Create the API around a dashboard.

    The dashboard is mounted when the server starts and unmounted on
    shutdown, so no timer outlives the process.

    Args:
        dashboard: Dashboard to expose

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        dashboard.mount()
        try:
            yield
        finally:
            dashboard.unmount()

    app = FastAPI(
        title="Quakeboard API",
        description="Render frames for the unattended earthquake display",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    # Handlers must stay async: they run on the loop that owns the timers
    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Mount status, snapshot size and time of the last view change."""
        last = dashboard.last_transition
        return {
            "status": "ok",
            "mounted": dashboard.mounted,
            "earthquakes": len(dashboard.earthquakes),
            "last_transition": last.isoformat() if last else None,
        }

    @app.put("/earthquakes", response_model=IngestResponse)
    async def put_earthquakes(records: list[EarthquakeRecord]) -> IngestResponse:
        """Replace the event snapshot."""
        result = dashboard.load_records([r.model_dump() for r in records])
        logger.info(result.summary)
        return IngestResponse(
            received=result.received,
            accepted=result.accepted,
            rejected=result.rejected,
        )

    @app.get("/display")
    async def get_display() -> dict[str, Any]:
        """Current render frame."""
        return asdict(dashboard.render())

    return app
