"""
RoadPulse Application Configuration
Uses pydantic-settings to load from .env file and environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Central configuration loaded from environment variables / .env file."""

    # ── Mapbox ──
    mapbox_public_token: str = Field(default="", description="Mapbox access token for the Directions API")
    mapbox_base_url: str = Field(default="https://api.mapbox.com")
    mapbox_profile: str = Field(
        default="mapbox/driving-traffic",
        description="Directions profile; driving-traffic is the only one with congestion annotations",
    )

    # ── Upstream HTTP ──
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    upstream_retries: int = Field(default=1, ge=0, description="Retries on connection failures only")

    # ── API Server ──
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    debug: bool = Field(default=True)
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["authorization", "x-client-info", "apikey", "content-type"],
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton instance
settings = Settings()
