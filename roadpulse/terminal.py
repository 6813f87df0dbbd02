"""
RoadPulse Terminal Mode
Analyze one route from the command line and print a status card.

Usage:
    python -m roadpulse.terminal --start=-0.1276,51.5072 --end=-0.0877,51.5155
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone

from roadpulse.core.exceptions import NoRouteError, TrafficAnalysisError
from roadpulse.engine.congestion import describe
from roadpulse.models.schemas import ClassificationResult
from roadpulse.services.mapbox import LngLat, MapboxDirectionsService
from roadpulse.services.traffic_analysis import TrafficAnalysisService
from roadpulse.utils.formatting import format_delay, format_distance, format_duration

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_ROUTE = 2

# ─── Terminal output helpers ─────────────────────────────────────────────────

def _ts() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

def _section(title: str) -> None:
    print()
    print("=" * 60)
    print(f"  [{_ts()}]  {title}")
    print("=" * 60)

def _line(key: str, value: object) -> None:
    print(f"  {key}: {value}")


def parse_lnglat(text: str) -> LngLat:
    """Parse 'lng,lat' into a coordinate pair."""
    try:
        lng_text, lat_text = text.split(",")
        lng, lat = float(lng_text), float(lat_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LNG,LAT, got {text!r}")
    if not -180 <= lng <= 180 or not -90 <= lat <= 90:
        raise argparse.ArgumentTypeError(f"coordinate out of range: {text!r}")
    return lng, lat


def print_status(result: ClassificationResult) -> None:
    info = describe(result.classification)
    _section(f"TRAFFIC: {info.label.upper()}")
    print(f"  {info.description}")
    _line("duration", format_duration(result.duration))
    _line("distance", format_distance(result.distance))
    _line("delay", format_delay(result.delay))
    print("  congestion_breakdown:")
    for level, count in result.congestion_breakdown.model_dump().items():
        print(f"    {level:<9} {count}")


async def _analyze(start: LngLat, end: LngLat) -> ClassificationResult:
    directions = MapboxDirectionsService()
    try:
        return await TrafficAnalysisService(directions).analyze(start, end)
    finally:
        await directions.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RoadPulse - classify traffic on a route")
    parser.add_argument("--start", required=True, type=parse_lnglat, help="origin as LNG,LAT")
    parser.add_argument("--end", required=True, type=parse_lnglat, help="destination as LNG,LAT")
    parser.add_argument("--json", action="store_true", help="print the raw JSON record instead of a status card")
    parser.add_argument("-v", "--verbose", action="store_true", help="log provider calls")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s │ %(name)-28s │ %(levelname)-7s │ %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(_analyze(args.start, args.end))
    except NoRouteError:
        print("  ERROR: No route found", file=sys.stderr)
        return EXIT_NO_ROUTE
    except TrafficAnalysisError as e:
        print(f"  ERROR: Failed to analyze traffic ({e})", file=sys.stderr)
        return EXIT_FAILED

    if args.json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    else:
        print_status(result)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
