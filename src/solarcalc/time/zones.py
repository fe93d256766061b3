"""Time-zone resolution backed by the IANA database (`zoneinfo`)."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from solarcalc.contracts import SolarContext

_log = logging.getLogger(__name__)


class UnknownTimeZoneError(ValueError):
    """Raised when a zone identifier is not in the time-zone database."""


def _zone(zone_id: str) -> ZoneInfo:
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimeZoneError(f"unknown time zone: {zone_id!r}") from exc


def utc_offset_seconds(zone_id: str, at: datetime) -> int:
    """Return the signed UTC offset of `zone_id` valid at instant `at`.

    Naive datetimes are read as local wall time in the zone, which is how
    DST-ambiguous inputs get resolved (`fold=0`, the earlier offset).
    """
    tz = _zone(zone_id)
    local = at.replace(tzinfo=tz) if at.tzinfo is None else at.astimezone(tz)
    offset = local.utcoffset()
    if offset is None:
        raise UnknownTimeZoneError(f"time zone {zone_id!r} has no UTC offset")
    seconds = int(offset.total_seconds())
    _log.debug("resolved %s at %s to %+d s", zone_id, local.isoformat(), seconds)
    return seconds


def utc_offset_hours(zone_id: str, at: datetime) -> float:
    return utc_offset_seconds(zone_id, at) / 3600.0


def _local_wall_time(ctx: SolarContext) -> datetime:
    return datetime.combine(ctx.date, time()) + timedelta(days=ctx.day_time)


def context_for_zone(
    latitude: float,
    longitude: float,
    day_time: float,
    zone_id: str,
    on_date: object,
) -> SolarContext:
    """Build a context whose UTC offset is the one `zone_id` observes on that local day/time."""
    ctx = SolarContext(
        latitude=latitude,
        longitude=longitude,
        date=on_date,
        day_time=day_time,
    )
    return with_time_zone(ctx, zone_id)


def with_time_zone(ctx: SolarContext, zone_id: str) -> SolarContext:
    """Return a copy of `ctx` using the offset of `zone_id` at the context's local time."""
    wall_time = _local_wall_time(ctx)
    return ctx.with_utc_offset_hours(utc_offset_hours(zone_id, wall_time))
