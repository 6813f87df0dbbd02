import pytest

from roadpulse.models.schemas import RouteMetrics

SAMPLE_GEOMETRY = {
    "type": "LineString",
    "coordinates": [[-0.1276, 51.5072], [-0.1100, 51.5100], [-0.0877, 51.5155]],
}


@pytest.fixture
def route_metrics():
    return RouteMetrics(duration=1200.0, distance=15000.0, weight=1500.0)


@pytest.fixture
def directions_payload():
    """Factory for a Mapbox Directions body with one route."""
    def _make(congestion=None, duration=1200.0, distance=15000.0, weight=1500.0, geometry=SAMPLE_GEOMETRY):
        return {
            "code": "Ok",
            "routes": [
                {
                    "duration": duration,
                    "distance": distance,
                    "weight": weight,
                    "weight_name": "auto",
                    "geometry": geometry,
                    "legs": [
                        {
                            "summary": "A40, A501",
                            "annotation": {
                                "congestion": list(congestion or []),
                                "duration": [10.0] * len(congestion or []),
                            },
                        }
                    ],
                }
            ],
            "waypoints": [],
        }
    return _make
