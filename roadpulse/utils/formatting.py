"""Human-readable durations and distances for status output."""

from roadpulse.engine.congestion import round_half_up


def format_duration(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} min"


def format_distance(meters: float) -> str:
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{round_half_up(meters)} m"


def format_delay(seconds: float) -> str:
    if seconds > 0:
        return f"+{format_duration(seconds)}"
    return "0 min"
