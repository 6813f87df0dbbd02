"""
RoadPulse Traffic API Routes (v1)
Endpoints: /analyze-traffic, /traffic/levels
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from roadpulse.core.events import get_analysis_service
from roadpulse.core.exceptions import NoRouteError
from roadpulse.engine.congestion import SEVERITY_LEVELS
from roadpulse.models.schemas import (
    AnalyzeTrafficRequest,
    ClassificationResult,
    SeverityLevelInfo,
)
from roadpulse.services.traffic_analysis import TrafficAnalysisService

logger = logging.getLogger("roadpulse.api.routes")

router = APIRouter(prefix="/api/v1", tags=["Traffic"])


# ═══════════════════════════════════════════════════════════════
# POST /analyze-traffic: Route Congestion Classification
# ═══════════════════════════════════════════════════════════════

@router.post(
    "/analyze-traffic",
    response_model=ClassificationResult,
    responses={404: {"description": "No route found"}, 500: {"description": "Failed to analyze traffic"}},
)
async def analyze_traffic(
    request: AnalyzeTrafficRequest,
    service: TrafficAnalysisService = Depends(get_analysis_service),
):
    """
    Classify current traffic between two [lng, lat] points.

    Returns the severity class (clear/moderate/heavy/severe), duration,
    distance, delay versus free flow, per-level congestion counts and the
    route geometry to draw.
    """
    start = (request.start_coords[0], request.start_coords[1])
    end = (request.end_coords[0], request.end_coords[1])

    try:
        return await service.analyze(start, end)
    except NoRouteError:
        return ORJSONResponse(status_code=404, content={"error": "No route found"})
    except Exception as e:
        logger.error(f"Traffic analysis error: {e}", exc_info=True)
        return ORJSONResponse(status_code=500, content={"error": "Failed to analyze traffic"})


# ═══════════════════════════════════════════════════════════════
# GET /traffic/levels: Severity Legend
# ═══════════════════════════════════════════════════════════════

@router.get("/traffic/levels", response_model=list[SeverityLevelInfo])
async def get_traffic_levels():
    """Legend of the four severity classes in rank order."""
    return list(SEVERITY_LEVELS)
