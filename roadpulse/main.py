"""
RoadPulse FastAPI Application Entry Point
Route traffic-congestion classification over the Mapbox Directions API.

Run with:
    uvicorn roadpulse.main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from roadpulse.core.config import settings
from roadpulse.core.events import lifespan
from roadpulse.api.v1.routes import router as traffic_router

# ── Logging ──
logging.basicConfig(
    level=logging.INFO if settings.debug else logging.WARNING,
    format="%(asctime)s │ %(name)-28s │ %(levelname)-7s │ %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)

logger = logging.getLogger("roadpulse")

# ═══════════════════════════════════════════════════════════════
# FastAPI App
# ═══════════════════════════════════════════════════════════════

app = FastAPI(
    title="RoadPulse",
    description=(
        "Route traffic classifier. Turns a routing provider's per-segment "
        "congestion annotations into one severity class and a delay estimate."
    ),
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (browser clients call the analysis endpoint directly) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# ── Register Routers ──
app.include_router(traffic_router)


# ═══════════════════════════════════════════════════════════════
# Root & Health Endpoints
# ═══════════════════════════════════════════════════════════════

@app.get("/", tags=["Root"])
async def root():
    return {
        "name": "RoadPulse",
        "version": "1.0.0",
        "description": "Route traffic-congestion classifier",
        "docs": "/docs",
        "endpoints": {
            "analyze_traffic": "/api/v1/analyze-traffic",
            "traffic_levels": "/api/v1/traffic/levels",
            "health": "/health",
        },
    }


@app.get("/health", tags=["Root"])
async def health():
    return {"status": "ok", "service": "roadpulse"}


def run() -> None:
    import uvicorn

    uvicorn.run("roadpulse.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)


if __name__ == "__main__":
    run()
