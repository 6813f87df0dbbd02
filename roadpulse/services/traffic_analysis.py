"""
RoadPulse Traffic Analysis Service
Fetches a route from the routing provider, validates it into classifier
inputs and classifies it. Either a complete result is returned or an error
is raised; nothing partial ever leaves this module.
"""

import logging
from typing import Any, Optional

from roadpulse.core.exceptions import NoRouteError
from roadpulse.engine.congestion import CongestionClassifier, default_classifier, to_samples
from roadpulse.models.schemas import (
    ClassificationResult,
    CongestionLevel,
    DirectionsResponse,
    RouteMetrics,
)
from roadpulse.services.mapbox import LngLat, MapboxDirectionsService

logger = logging.getLogger("roadpulse.analysis")


def parse_route(payload: DirectionsResponse) -> tuple[RouteMetrics, list[CongestionLevel], Any]:
    """Split the first candidate route into metrics, congestion samples and geometry."""
    if not payload.routes:
        raise NoRouteError("No route found")

    route = payload.routes[0]
    metrics = RouteMetrics(duration=route.duration, distance=route.distance, weight=route.weight)
    samples = to_samples(route.legs[0].annotation.congestion)
    return metrics, samples, route.geometry


class TrafficAnalysisService:
    """Fetch → parse → classify, for one origin/destination pair per call."""

    def __init__(
        self,
        directions: MapboxDirectionsService,
        classifier: Optional[CongestionClassifier] = None,
    ) -> None:
        self.directions = directions
        self.classifier = classifier or default_classifier

    async def analyze(self, start: LngLat, end: LngLat) -> ClassificationResult:
        logger.info(f"Analyzing traffic from {list(start)} to {list(end)}")

        payload = await self.directions.get_directions(start, end)
        metrics, samples, geometry = parse_route(payload)
        result = self.classifier.classify(metrics, samples, geometry)

        logger.info(
            f"Traffic analysis complete: {result.classification.value}, "
            f"duration: {result.duration}s, distance: {result.distance}m, delay: {result.delay}s"
        )
        return result
