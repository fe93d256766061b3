"""Unit tests for data contracts."""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime, timedelta, timezone

import pytest

from solarcalc.astro.summary import compute_snapshot
from solarcalc.contracts import SolarContext, SolarValidationError


def _valid_context() -> SolarContext:
    return SolarContext(latitude=48.85, longitude=2.35, date=date(2024, 5, 1), day_time=0.5, utc_offset_hours=2.0)


@pytest.mark.parametrize(
    ("field", "overrides"),
    [
        ("latitude", {"latitude": 91.0}),
        ("latitude", {"latitude": float("nan")}),
        ("longitude", {"longitude": -181.0}),
        ("day_time", {"day_time": 1.5}),
        ("day_time", {"day_time": -0.01}),
        ("utc_offset_hours", {"utc_offset_hours": 15.0}),
        ("utc_offset_hours", {"utc_offset_hours": -12.5}),
        ("date", {"date": "2024-02-30"}),
        ("date", {"date": 20240101}),
        ("latitude", {"latitude": "north"}),
        ("latitude", {"latitude": True}),
        ("day_time", {"day_time": False}),
    ],
)
def test_context_rejects_out_of_range_fields(field: str, overrides: dict[str, object]) -> None:
    """Construction fails on the first invalid field and names it."""
    kwargs: dict[str, object] = {
        "latitude": 10.0,
        "longitude": 10.0,
        "date": date(2024, 1, 1),
        "day_time": 0.5,
        "utc_offset_hours": 0.0,
    }
    kwargs.update(overrides)

    with pytest.raises(SolarValidationError) as excinfo:
        SolarContext(**kwargs)  # type: ignore[arg-type]
    assert excinfo.value.field == field


def test_context_accepts_inclusive_bounds() -> None:
    """Every documented bound is inclusive."""
    ctx = SolarContext(latitude=-90.0, longitude=180.0, date=date(2024, 1, 1), day_time=1.0, utc_offset_hours=14.0)
    assert ctx.latitude == -90.0
    assert ctx.utc_offset_seconds == 14 * 3600


def test_context_normalizes_date_inputs() -> None:
    """ISO strings and aware datetimes become UTC calendar dates."""
    from_text = SolarContext(latitude=0.0, longitude=0.0, date="2024-03-20", day_time=0.5)
    eastern = timezone(timedelta(hours=-5))
    from_datetime = SolarContext(
        latitude=0.0,
        longitude=0.0,
        date=datetime(2024, 3, 20, 23, 30, tzinfo=eastern),
        day_time=0.5,
    )

    assert from_text.date == date(2024, 3, 20)
    assert from_datetime.date == date(2024, 3, 21)
    assert type(from_datetime.date) is date


def test_context_is_immutable() -> None:
    """Fields cannot be reassigned in place."""
    ctx = _valid_context()
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.latitude = 0.0  # type: ignore[misc]


def test_with_methods_return_validated_copies() -> None:
    """Rebuild operations validate and leave the original untouched."""
    ctx = _valid_context()

    moved = ctx.with_latitude(-33.9).with_longitude(18.4).with_utc_offset_hours(2.0)
    later = ctx.with_day_time(0.75).with_date("2024-12-24")

    assert (moved.latitude, moved.longitude) == (-33.9, 18.4)
    assert later.day_time == 0.75
    assert later.date == date(2024, 12, 24)
    assert ctx.latitude == 48.85 and ctx.day_time == 0.5

    with pytest.raises(SolarValidationError, match="latitude"):
        ctx.with_latitude(91.0)
    with pytest.raises(SolarValidationError, match="day_time"):
        ctx.with_day_time(2.0)
    with pytest.raises(SolarValidationError, match="invalid date"):
        ctx.with_date("yesterday")


def test_snapshot_serializes_to_json() -> None:
    """Snapshots render every quantity as JSON-compatible values."""
    payload = compute_snapshot(_valid_context()).to_dict()

    decoded = json.loads(json.dumps(payload))
    assert decoded["date"] == "2024-05-01"
    assert decoded["azimuth_degenerate"] is False
    assert decoded["polar_condition"] is None
    assert decoded["sunrise_hours"] < decoded["sunset_hours"]


def test_snapshot_renders_tagged_outcomes_as_nulls() -> None:
    """Polar night and degenerate azimuth become nulls plus flags."""
    ctx = SolarContext(latitude=90.0, longitude=0.0, date=date(2024, 12, 21), day_time=0.5)
    payload = compute_snapshot(ctx).to_dict()

    assert payload["azimuth_deg"] is None
    assert payload["azimuth_degenerate"] is True
    assert payload["sunrise_hours"] is None
    assert payload["polar_condition"] == "polar_night"
    assert payload["day_length_hours"] == 0.0


def test_snapshot_elevation_complements_zenith() -> None:
    """Snapshot elevation is the solar incidence angle, 90 minus the zenith."""
    snapshot = compute_snapshot(_valid_context())

    assert snapshot.elevation_deg == pytest.approx(90.0 - snapshot.zenith_deg)
