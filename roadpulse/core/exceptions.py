class TrafficAnalysisError(Exception):
    """Base exception for all traffic analysis errors."""
    pass

class NoRouteError(TrafficAnalysisError):
    """Raised when the routing provider returns no candidate routes."""
    pass

class UpstreamError(TrafficAnalysisError):
    """Raised when the routing provider call fails or returns malformed data."""
    pass

class ConfigurationError(UpstreamError):
    """Raised when the routing provider is not configured."""
    pass
