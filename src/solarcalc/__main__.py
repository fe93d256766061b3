"""Command-line entrypoint for solarcalc."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from solarcalc.astro.events import sunrise_and_sunset
from solarcalc.astro.summary import compute_snapshot
from solarcalc.contracts import SolarContext, sun_times_to_dict
from solarcalc.orchestrate.batch import day_profile
from solarcalc.time.calendar import to_calendar_date
from solarcalc.time.zones import context_for_zone


def _parse_date(value: str) -> date:
    """Parse ISO date string into a calendar date."""
    try:
        return to_calendar_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date: {value}") from exc


def _add_location_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lon", type=float, required=True)
    parser.add_argument("--date", type=_parse_date, required=True)
    parser.add_argument("--day-time", type=float, default=0.5)
    zone = parser.add_mutually_exclusive_group()
    zone.add_argument("--utc-offset", type=float, default=0.0, help="UTC offset in hours.")
    zone.add_argument("--tz", default=None, help="IANA time-zone identifier.")


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="solarcalc",
        description="NOAA solar position, sunrise/sunset and irradiance calculator.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    subparsers = parser.add_subparsers(dest="command")
    position = subparsers.add_parser("position", help="Print every derived solar quantity.")
    _add_location_arguments(position)

    sun_times = subparsers.add_parser("sun-times", help="Print sunrise, sunset and day length.")
    _add_location_arguments(sun_times)

    profile = subparsers.add_parser("profile", help="Print the sampled day profile.")
    _add_location_arguments(profile)
    profile.add_argument("--samples", type=int, default=97)
    profile.add_argument("--surface-angle", type=float, default=0.0)
    profile.add_argument("--surface-azimuth", type=float, default=0.0, help="Degrees from south, west positive.")
    profile.add_argument("--irradiance", type=float, default=1000.0)

    return parser


def _context_from_args(args: argparse.Namespace) -> SolarContext:
    if args.tz is not None:
        return context_for_zone(args.lat, args.lon, args.day_time, args.tz, args.date)
    return SolarContext(
        latitude=args.lat,
        longitude=args.lon,
        date=args.date,
        day_time=args.day_time,
        utc_offset_hours=args.utc_offset,
    )


def _run(args: argparse.Namespace) -> dict[str, Any]:
    ctx = _context_from_args(args)
    if args.command == "position":
        return compute_snapshot(ctx).to_dict()
    if args.command == "sun-times":
        return sun_times_to_dict(sunrise_and_sunset(ctx))
    profile = day_profile(
        ctx,
        samples=args.samples,
        surface_angle=args.surface_angle,
        surface_azimuth=args.surface_azimuth,
        horizontal_irradiance=args.irradiance,
    )
    return profile.to_dict()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        return 0

    try:
        result = _run(args)
    except ValueError as exc:
        parser.exit(2, f"solarcalc: error: {exc}\n")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
