"""
RoadPulse Pydantic V2 Schemas
Domain types for the congestion classifier, the routing-provider payload
accepted at the boundary, and the request/response models of the API layer.
"""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ═══════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════

class CongestionLevel(str, Enum):
    """Per-segment congestion tag, as annotated by the routing provider."""
    LOW = "low"
    MODERATE = "moderate"
    HEAVY = "heavy"
    SEVERE = "severe"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Any) -> "CongestionLevel":
        """Fold any unrecognised tag (None, numbers, typos) into UNKNOWN."""
        if isinstance(tag, str):
            try:
                return cls(tag)
            except ValueError:
                pass
        return cls.UNKNOWN


class Classification(str, Enum):
    """Route-level severity, ordered clear < moderate < heavy < severe."""
    CLEAR = "clear"
    MODERATE = "moderate"
    HEAVY = "heavy"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _CLASSIFICATION_RANK[self]


_CLASSIFICATION_RANK = {
    Classification.CLEAR: 0,
    Classification.MODERATE: 1,
    Classification.HEAVY: 2,
    Classification.SEVERE: 3,
}


# ═══════════════════════════════════════════════════════════════
# Classifier Domain Models
# ═══════════════════════════════════════════════════════════════

class RouteMetrics(BaseModel):
    """Timing figures of one routed path."""
    model_config = ConfigDict(frozen=True)

    duration: float = Field(..., ge=0, description="Observed travel time in seconds, current conditions included")
    distance: float = Field(..., ge=0, description="Route length in meters")
    weight: float = Field(..., description="Routing-engine cost; duration inflated by congestion penalties")


class CongestionBreakdown(BaseModel):
    """Occurrence count of every congestion level across a route's samples."""
    low: int = Field(default=0, ge=0)
    moderate: int = Field(default=0, ge=0)
    heavy: int = Field(default=0, ge=0)
    severe: int = Field(default=0, ge=0)
    unknown: int = Field(default=0, ge=0)

    @classmethod
    def from_samples(cls, samples: Iterable[CongestionLevel]) -> "CongestionBreakdown":
        counts = {level.value: 0 for level in CongestionLevel}
        for sample in samples:
            counts[sample.value] += 1
        return cls(**counts)

    def count(self, level: CongestionLevel) -> int:
        return getattr(self, level.value)

    @property
    def total(self) -> int:
        return self.low + self.moderate + self.heavy + self.severe + self.unknown


class ClassificationResult(BaseModel):
    """Outcome of classifying one route. Serialized with camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)

    classification: Classification
    duration: float
    distance: float
    delay: int = Field(..., ge=0, description="Seconds lost versus free-flow travel time")
    congestion_breakdown: CongestionBreakdown = Field(..., alias="congestionBreakdown")
    route_geometry: Any = Field(default=None, alias="route", description="Provider geometry, passed through untouched")


# ═══════════════════════════════════════════════════════════════
# Routing Provider Payload (Mapbox Directions)
# ═══════════════════════════════════════════════════════════════

class LegAnnotation(BaseModel):
    # Items are not validated one by one: bad tags fold into "unknown"
    congestion: list[Any]


class RouteLeg(BaseModel):
    annotation: LegAnnotation


class DirectionsRoute(BaseModel):
    duration: float = Field(..., ge=0)
    distance: float = Field(..., ge=0)
    weight: float
    geometry: Any = None
    legs: list[RouteLeg] = Field(..., min_length=1)


class DirectionsResponse(BaseModel):
    code: Optional[str] = None
    message: Optional[str] = None
    routes: list[DirectionsRoute] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════
# API Models
# ═══════════════════════════════════════════════════════════════

class AnalyzeTrafficRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_coords: list[float] = Field(..., alias="startCoords", min_length=2, max_length=2, description="[lng, lat]")
    end_coords: list[float] = Field(..., alias="endCoords", min_length=2, max_length=2, description="[lng, lat]")

    @field_validator("start_coords", "end_coords")
    def coords_must_be_on_earth(cls, v):
        lng, lat = v
        if not -180 <= lng <= 180:
            raise ValueError("longitude must be within [-180, 180]")
        if not -90 <= lat <= 90:
            raise ValueError("latitude must be within [-90, 90]")
        return v


class SeverityLevelInfo(BaseModel):
    """Legend entry describing one classification."""
    classification: Classification
    rank: int
    label: str
    description: str
    color: str = Field(..., description="Hex color used on the map")
