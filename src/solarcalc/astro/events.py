"""Sunrise, sunset and day length."""

from __future__ import annotations

from math import acos, ceil, cos, degrees, floor, radians, tan

from solarcalc.astro.noaa import solar_declination, solar_noon
from solarcalc.contracts import NoSunrise, PolarCondition, SolarContext, SunTimes

# Geometric zenith of the sun's upper limb at apparent sunrise, refraction included.
SUNRISE_ZENITH_DEG = 90.833


def hour_angle_sunrise(ctx: SolarContext) -> float | NoSunrise:
    """Hour angle of sunrise in degrees, or `NoSunrise` during polar day/night."""
    lat_rad = radians(ctx.latitude)
    decl_rad = radians(solar_declination(ctx))

    cos_hour_angle = cos(radians(SUNRISE_ZENITH_DEG)) / (cos(lat_rad) * cos(decl_rad)) - tan(
        lat_rad
    ) * tan(decl_rad)

    if cos_hour_angle > 1.0:
        return NoSunrise(PolarCondition.POLAR_NIGHT, cos_hour_angle)
    if cos_hour_angle < -1.0:
        return NoSunrise(PolarCondition.POLAR_DAY, cos_hour_angle)
    return degrees(acos(cos_hour_angle))


def sunrise_and_sunset(ctx: SolarContext) -> SunTimes | NoSunrise:
    """Sunrise and sunset in local clock hours."""
    hour_angle = hour_angle_sunrise(ctx)
    if isinstance(hour_angle, NoSunrise):
        return hour_angle

    noon_deg = solar_noon(ctx) * 360.0
    return SunTimes(
        sunrise=(noon_deg - hour_angle) / 15.0,
        sunset=(noon_deg + hour_angle) / 15.0,
    )


def sunrise_time(ctx: SolarContext) -> float | NoSunrise:
    times = sunrise_and_sunset(ctx)
    return times if isinstance(times, NoSunrise) else times.sunrise


def sunset_time(ctx: SolarContext) -> float | NoSunrise:
    times = sunrise_and_sunset(ctx)
    return times if isinstance(times, NoSunrise) else times.sunset


def day_length(ctx: SolarContext) -> float | NoSunrise:
    """Hours between sunrise and sunset."""
    times = sunrise_and_sunset(ctx)
    return times if isinstance(times, NoSunrise) else times.day_length


def standard_meridian(longitude: float) -> float:
    """Return the multiple of 15 degrees nearest to `longitude`."""
    upper = ceil(longitude / 15.0) * 15.0
    lower = floor(longitude / 15.0) * 15.0
    return upper if abs(longitude - upper) < abs(longitude - lower) else lower
