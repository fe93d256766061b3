"""Core data contracts for solar geometry calculations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from solarcalc.time.calendar import to_calendar_date

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
DAY_TIME_RANGE = (0.0, 1.0)
UTC_OFFSET_HOURS_RANGE = (-12.0, 14.0)


class SolarValidationError(ValueError):
    """Raised when a context field violates its documented bound."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


def _check_range(field: str, value: object, bounds: tuple[float, float], label: str) -> float:
    """Return `value` as float or raise when it is outside the closed interval."""
    if isinstance(value, bool):
        raise SolarValidationError(field, f"{label} must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise SolarValidationError(field, f"{label} must be a number") from exc

    low, high = bounds
    if not (low <= number <= high):
        raise SolarValidationError(field, f"{label} must be between {low:g} and {high:g}")
    return number


class PolarCondition(StrEnum):
    """Why the sun does not cross the horizon on a given day."""

    POLAR_DAY = "polar_day"
    POLAR_NIGHT = "polar_night"


@dataclass(frozen=True, slots=True)
class NoSunrise:
    """Tagged outcome for days without sunrise or sunset.

    `cos_hour_angle` is the out-of-domain arc-cosine argument that triggered it.
    """

    condition: PolarCondition
    cos_hour_angle: float

    @property
    def day_length_hours(self) -> float:
        """Hours of daylight implied by the polar condition."""
        return 24.0 if self.condition is PolarCondition.POLAR_DAY else 0.0


@dataclass(frozen=True, slots=True)
class DegenerateAzimuth:
    """Tagged outcome when azimuth is undefined (sun at zenith, or observer at a pole)."""

    zenith_deg: float
    denominator: float


@dataclass(frozen=True, slots=True)
class SunTimes:
    """Sunrise and sunset in hours of the local clock day."""

    sunrise: float
    sunset: float

    @property
    def day_length(self) -> float:
        return self.sunset - self.sunrise


@dataclass(frozen=True, slots=True)
class SolarContext:
    """Validated, immutable inputs for the NOAA solar calculation chain.

    `date` holds UTC calendar fields; `day_time` is the local fraction of the
    day (0 = midnight); `utc_offset_hours` shifts local time to UTC.
    """

    latitude: float
    longitude: float
    date: date
    day_time: float
    utc_offset_hours: float = 0.0

    def __post_init__(self) -> None:
        """Validate every field; a failing context is never returned."""
        set_field = object.__setattr__
        set_field(self, "latitude", _check_range("latitude", self.latitude, LATITUDE_RANGE, "latitude"))
        set_field(
            self, "longitude", _check_range("longitude", self.longitude, LONGITUDE_RANGE, "longitude")
        )
        try:
            set_field(self, "date", to_calendar_date(self.date))
        except ValueError as exc:
            raise SolarValidationError("date", "invalid date provided") from exc
        set_field(self, "day_time", _check_range("day_time", self.day_time, DAY_TIME_RANGE, "day_time"))
        set_field(
            self,
            "utc_offset_hours",
            _check_range("utc_offset_hours", self.utc_offset_hours, UTC_OFFSET_HOURS_RANGE, "utc offset"),
        )

    @property
    def utc_offset_seconds(self) -> int:
        return round(self.utc_offset_hours * 3600)

    def with_latitude(self, latitude: float) -> SolarContext:
        """Return a copy with a new latitude."""
        return dataclasses.replace(self, latitude=latitude)

    def with_longitude(self, longitude: float) -> SolarContext:
        """Return a copy with a new longitude."""
        return dataclasses.replace(self, longitude=longitude)

    def with_date(self, value: object) -> SolarContext:
        """Return a copy for another calendar date."""
        return dataclasses.replace(self, date=value)

    def with_day_time(self, day_time: float) -> SolarContext:
        """Return a copy at another fraction of the day."""
        return dataclasses.replace(self, day_time=day_time)

    def with_utc_offset_hours(self, utc_offset_hours: float) -> SolarContext:
        """Return a copy with another UTC offset."""
        return dataclasses.replace(self, utc_offset_hours=utc_offset_hours)


@dataclass(frozen=True, slots=True)
class SolarSnapshot:
    """Every derived quantity for one context, in NOAA units."""

    context: SolarContext
    julian_day: float
    julian_century: float
    equation_of_time_min: float
    solar_declination_deg: float
    solar_noon: float
    true_solar_time_min: float
    hour_angle_deg: float
    zenith_deg: float
    elevation_deg: float
    azimuth: float | DegenerateAzimuth
    sun_times: SunTimes | NoSunrise

    def to_dict(self) -> dict[str, Any]:
        """Serialize the snapshot to a JSON-compatible dictionary."""
        ctx = self.context
        payload: dict[str, Any] = {
            "latitude": ctx.latitude,
            "longitude": ctx.longitude,
            "date": ctx.date.isoformat(),
            "day_time": ctx.day_time,
            "utc_offset_hours": ctx.utc_offset_hours,
            "julian_day": self.julian_day,
            "julian_century": self.julian_century,
            "equation_of_time_min": self.equation_of_time_min,
            "solar_declination_deg": self.solar_declination_deg,
            "solar_noon": self.solar_noon,
            "true_solar_time_min": self.true_solar_time_min,
            "hour_angle_deg": self.hour_angle_deg,
            "zenith_deg": self.zenith_deg,
            "elevation_deg": self.elevation_deg,
        }

        if isinstance(self.azimuth, DegenerateAzimuth):
            payload["azimuth_deg"] = None
            payload["azimuth_degenerate"] = True
        else:
            payload["azimuth_deg"] = self.azimuth
            payload["azimuth_degenerate"] = False

        payload.update(sun_times_to_dict(self.sun_times))
        return payload


def sun_times_to_dict(outcome: SunTimes | NoSunrise) -> dict[str, Any]:
    """Render sunrise/sunset or the polar condition as plain JSON fields."""
    if isinstance(outcome, NoSunrise):
        return {
            "sunrise_hours": None,
            "sunset_hours": None,
            "day_length_hours": outcome.day_length_hours,
            "polar_condition": outcome.condition.value,
        }
    return {
        "sunrise_hours": outcome.sunrise,
        "sunset_hours": outcome.sunset,
        "day_length_hours": outcome.day_length,
        "polar_condition": None,
    }
