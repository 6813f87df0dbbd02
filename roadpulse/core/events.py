"""
RoadPulse FastAPI Lifespan Events
Opens the shared routing-provider client on startup and closes it on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from roadpulse.services.mapbox import MapboxDirectionsService
from roadpulse.services.traffic_analysis import TrafficAnalysisService

logger = logging.getLogger("roadpulse.events")

# ── Global references for DI ──
directions_service: MapboxDirectionsService | None = None
analysis_service: TrafficAnalysisService | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    global directions_service, analysis_service

    logger.info("=" * 60)
    logger.info("  RoadPulse Starting Up")
    logger.info("=" * 60)

    directions_service = MapboxDirectionsService()
    analysis_service = TrafficAnalysisService(directions_service)

    yield  # ── App is running ──

    logger.info("Shutting down RoadPulse...")
    await directions_service.close()
    directions_service = None
    analysis_service = None
    logger.info("Shutdown complete.")


async def get_analysis_service() -> AsyncGenerator[TrafficAnalysisService, None]:
    """
    FastAPI dependency. Hands out the lifespan-owned service; without a lifespan
    (app mounted with startup events disabled) a per-request client is opened and closed.
    """
    if analysis_service is not None:
        yield analysis_service
        return

    directions = MapboxDirectionsService()
    try:
        yield TrafficAnalysisService(directions)
    finally:
        await directions.close()
