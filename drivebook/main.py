# drivebook/main.py
"""
FastAPI application for the DriveBook scheduling core.

The lifespan builds the scheduling service from settings and awaits
its initial load; the schedule routes answer 503 until it finishes.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, FastAPI, Response

from .core.config import Settings, settings
from .core.constants import API_PREFIX, API_VERSION, BRAND_NAME
from .monitoring.prometheus_metrics import prometheus_metrics
from .routes.v1 import schedule as schedule_routes
from .services.factory import create_scheduling_service
from .services.scheduling_service import SchedulingService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


metrics_router = APIRouter()


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )


def create_app(
    app_settings: Optional[Settings] = None,
    scheduling_service: Optional[SchedulingService] = None,
) -> FastAPI:
    """
    Create the application.

    Args:
        app_settings: Settings to build from (defaults to the module settings)
        scheduling_service: Pre-built service, used instead of building one
    """
    active_settings = app_settings or settings
    configure_logging(active_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        service = scheduling_service or create_scheduling_service(active_settings)
        app.state.scheduling_service = service
        await service.load()
        logger.info(
            f"{BRAND_NAME} scheduling ready",
            extra={"availability": len(service.availability), "bookings": len(service.bookings)},
        )
        try:
            yield
        finally:
            await service.aclose()

    app = FastAPI(
        title=f"{BRAND_NAME} Scheduling API",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.include_router(schedule_routes.router, prefix=f"{API_PREFIX}/schedule")
    app.include_router(metrics_router)
    return app
