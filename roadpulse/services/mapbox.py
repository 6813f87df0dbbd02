"""
RoadPulse Mapbox Directions Client
Fetches one traffic-aware route with per-segment congestion annotations.

API used:
  - Directions: GET /directions/v5/{profile}/{lng},{lat};{lng},{lat}
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from roadpulse.core.config import settings
from roadpulse.core.exceptions import ConfigurationError, NoRouteError, UpstreamError
from roadpulse.models.schemas import DirectionsResponse

logger = logging.getLogger("roadpulse.mapbox")

# Mapbox coordinates are (lng, lat)
LngLat = tuple[float, float]

# Route-less answers: no path between the points, or no road near one of them
NO_ROUTE_CODES = frozenset({"NoRoute", "NoSegment"})


class MapboxDirectionsService:
    """Async client for the Mapbox Directions API."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        profile: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._access_token = access_token if access_token is not None else settings.mapbox_public_token
        self.base_url = (base_url or settings.mapbox_base_url).rstrip("/")
        self.profile = profile or settings.mapbox_profile
        if not self._access_token:
            logger.warning("MAPBOX_PUBLIC_TOKEN not set; traffic analysis disabled")

        if transport is None:
            transport = httpx.AsyncHTTPTransport(
                retries=settings.upstream_retries if retries is None else retries,
            )
        self._client = httpx.AsyncClient(
            timeout=settings.request_timeout_seconds if timeout is None else timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def is_available(self) -> bool:
        return bool(self._access_token)

    def directions_url(self, start: LngLat, end: LngLat) -> str:
        waypoints = f"{start[0]},{start[1]};{end[0]},{end[1]}"
        return f"{self.base_url}/directions/v5/{self.profile}/{waypoints}"

    async def get_directions(self, start: LngLat, end: LngLat) -> DirectionsResponse:
        """
        Get the traffic-aware route between two points.

        Args:
            start: (lng, lat) of the origin
            end: (lng, lat) of the destination

        Returns:
            Validated Directions payload with at least one route.

        Raises:
            NoRouteError: the provider found no route between the points
            UpstreamError: the call failed or the payload is malformed
        """
        if not self.is_available:
            raise ConfigurationError("Mapbox token not configured")

        params = {
            "geometries": "geojson",
            "overview": "full",
            "annotations": "congestion,duration",
            "access_token": self._access_token,
        }

        try:
            resp = await self._client.get(self.directions_url(start, end), params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Mapbox directions request timed out: {e}")
            raise UpstreamError("Routing provider timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Mapbox directions request failed: {e}")
            raise UpstreamError("Routing provider unreachable") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Mapbox directions returned non-JSON body (status {resp.status_code})")
            raise UpstreamError("Routing provider returned a non-JSON body") from e

        code = data.get("code") if isinstance(data, dict) else None
        if code in NO_ROUTE_CODES:
            logger.warning(f"No route between {start} and {end}")
            raise NoRouteError("No route found")

        if resp.status_code != 200:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error(f"Mapbox directions error: {resp.status_code} - {message or resp.text}")
            raise UpstreamError(f"Routing provider error: {resp.status_code}")

        try:
            payload = DirectionsResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed Mapbox directions payload: {e.error_count()} validation errors")
            raise UpstreamError("Routing provider returned malformed data") from e

        if not payload.routes:
            logger.warning(f"No route between {start} and {end}")
            raise NoRouteError("No route found")

        logger.info(f"Mapbox route: {len(payload.routes)} candidate(s), profile={self.profile}")
        return payload
