"""
Route congestion classification from per-segment congestion annotations.
Output: one severity class (clear/moderate/heavy/severe), a delay estimate
against free-flow travel time, and the per-level breakdown.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from roadpulse.models.schemas import (
    Classification,
    ClassificationResult,
    CongestionBreakdown,
    CongestionLevel,
    RouteMetrics,
    SeverityLevelInfo,
)

# Levels whose share of the route feeds the decision; low/unknown are only counted
DECISION_LEVELS = (CongestionLevel.SEVERE, CongestionLevel.HEAVY, CongestionLevel.MODERATE)


@dataclass(frozen=True)
class ThresholdRule:
    """
    Promote a route to `classification` when ANY condition holds.
    A condition (level, threshold) holds when the level's ratio is strictly above threshold.
    """
    classification: Classification
    conditions: tuple[tuple[CongestionLevel, float], ...]

    def matches(self, ratios: Mapping[CongestionLevel, float]) -> bool:
        return any(ratios.get(level, 0.0) > threshold for level, threshold in self.conditions)


# Ordered, first match wins. Heavy is reachable through a little severe or a lot of heavy.
DEFAULT_RULES: tuple[ThresholdRule, ...] = (
    ThresholdRule(Classification.SEVERE, ((CongestionLevel.SEVERE, 0.20),)),
    ThresholdRule(Classification.HEAVY, ((CongestionLevel.HEAVY, 0.30), (CongestionLevel.SEVERE, 0.10))),
    ThresholdRule(Classification.MODERATE, ((CongestionLevel.MODERATE, 0.30), (CongestionLevel.HEAVY, 0.10))),
)

FALLBACK_CLASSIFICATION = Classification.CLEAR


SEVERITY_LEVELS: tuple[SeverityLevelInfo, ...] = (
    SeverityLevelInfo(
        classification=Classification.CLEAR, rank=Classification.CLEAR.rank,
        label="Clear", description="Traffic is flowing smoothly", color="#22c55e",
    ),
    SeverityLevelInfo(
        classification=Classification.MODERATE, rank=Classification.MODERATE.rank,
        label="Moderate", description="Some slowdowns expected", color="#f59e0b",
    ),
    SeverityLevelInfo(
        classification=Classification.HEAVY, rank=Classification.HEAVY.rank,
        label="Heavy", description="Significant delays likely", color="#f97316",
    ),
    SeverityLevelInfo(
        classification=Classification.SEVERE, rank=Classification.SEVERE.rank,
        label="Severe", description="Major congestion ahead", color="#ef4444",
    ),
)


def describe(classification: Classification) -> SeverityLevelInfo:
    """Legend entry (label, description, color) for a classification."""
    for info in SEVERITY_LEVELS:
        if info.classification == classification:
            return info
    raise KeyError(classification)


# ═══════════════════════════════════════════════════════════════
# Delay Estimation
# ═══════════════════════════════════════════════════════════════

def estimate_typical_duration(duration: float, weight: float) -> float:
    """
    Free-flow travel time implied by the routing weight.

    The weight is modelled as duration inflated by a congestion penalty factor
    (1 + (weight - duration) / duration); dividing it back out recovers the
    uncongested time. A zero-duration route, or a non-positive factor, has no
    meaningful penalty and keeps its observed duration.
    """
    if duration <= 0:
        return duration
    factor = 1 + (weight - duration) / duration
    if factor <= 0:
        return duration
    return duration / factor


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_delay(route: RouteMetrics) -> int:
    """Whole seconds lost versus free flow, never negative."""
    typical = estimate_typical_duration(route.duration, route.weight)
    return round_half_up(max(0.0, route.duration - typical))


# ═══════════════════════════════════════════════════════════════
# Ratios & Threshold Policy
# ═══════════════════════════════════════════════════════════════

def to_samples(annotations: Iterable[Any]) -> list[CongestionLevel]:
    """Normalise raw tags to congestion levels, keeping traversal order."""
    return [CongestionLevel.from_tag(tag) for tag in annotations]


def compute_ratios(breakdown: CongestionBreakdown) -> dict[CongestionLevel, float]:
    """Share of the route's samples at each decision level. All zero for an empty route."""
    total = max(1, breakdown.total)
    return {level: breakdown.count(level) / total for level in DECISION_LEVELS}


def select_classification(
    ratios: Mapping[CongestionLevel, float],
    rules: Sequence[ThresholdRule] = DEFAULT_RULES,
) -> Classification:
    for rule in rules:
        if rule.matches(ratios):
            return rule.classification
    return FALLBACK_CLASSIFICATION


class CongestionClassifier:
    """
    Convert a route's timing figures and congestion annotations into a severity class.
    Stateless apart from its rule list; safe to share between concurrent callers.
    """

    def __init__(self, rules: Sequence[ThresholdRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def classify(
        self,
        route: RouteMetrics,
        annotations: Iterable[Any],
        geometry: Any = None,
    ) -> ClassificationResult:
        samples = to_samples(annotations)
        breakdown = CongestionBreakdown.from_samples(samples)
        classification = select_classification(compute_ratios(breakdown), self.rules)

        return ClassificationResult(
            classification=classification,
            duration=route.duration,
            distance=route.distance,
            delay=estimate_delay(route),
            congestion_breakdown=breakdown,
            route_geometry=geometry,
        )


default_classifier = CongestionClassifier()


def classify(route: RouteMetrics, annotations: Iterable[Any], geometry: Any = None) -> ClassificationResult:
    """Classify with the default threshold policy."""
    return default_classifier.classify(route, annotations, geometry)
