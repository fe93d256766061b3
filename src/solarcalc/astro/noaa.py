"""NOAA solar position formulas.

Each function takes a validated `SolarContext` and recomputes its inputs from
the chain Julian Day -> Julian Century -> orbital elements -> solar angles.
Angles are in degrees; trigonometry converts at the call site.
"""

from __future__ import annotations

import logging
from datetime import date
from math import acos, asin, cos, degrees, radians, sin

from solarcalc.contracts import DegenerateAzimuth, SolarContext

_log = logging.getLogger(__name__)

JD_1900_EPOCH = 2415020.5
JD_J2000 = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0
MINUTES_PER_DAY = 1440.0

_EPOCH_1900 = date(1900, 1, 1)
_VAR_Y = 0.043031509
_AZIMUTH_DENOMINATOR_EPS = 1e-9


def wrap(value: float, period: float) -> float:
    """Reduce `value` into [0, period)."""
    out = value % period
    # -1e-17 % 360.0 rounds up to exactly 360.0
    return 0.0 if out >= period else out


def _clamp_unit(value: float) -> float:
    return min(1.0, max(-1.0, value))


def _nutation_angle(jc: float) -> float:
    """Longitude of the moon's ascending node term, degrees."""
    return 125.04 - 1934.136 * jc


def julian_day(ctx: SolarContext) -> float:
    """Julian Day of the context instant, referenced to UTC."""
    if not isinstance(ctx.date, date):
        _log.warning("context date %r is not a calendar date; julian day falls back to 0", ctx.date)
        return 0.0
    days = (ctx.date - _EPOCH_1900).days
    return days + JD_1900_EPOCH + (ctx.day_time - ctx.utc_offset_hours / 24.0)


def julian_century(ctx: SolarContext) -> float:
    """Julian centuries since J2000.0."""
    return (julian_day(ctx) - JD_J2000) / DAYS_PER_JULIAN_CENTURY


def geom_mean_long_sun(ctx: SolarContext) -> float:
    """Geometric mean longitude of the sun in [0, 360)."""
    jc = julian_century(ctx)
    return wrap(280.46646 + jc * (36000.76983 + jc * 0.0003032), 360.0)


def geom_mean_anom_sun(ctx: SolarContext) -> float:
    """Geometric mean anomaly of the sun (not range reduced)."""
    jc = julian_century(ctx)
    return 357.52911 + jc * (35999.05029 - 0.0001537 * jc)


def eccent_earth_orbit(ctx: SolarContext) -> float:
    """Eccentricity of earth's orbit (unitless)."""
    jc = julian_century(ctx)
    return 0.016708634 - jc * (0.000042037 + 0.0000001267 * jc)


def equation_of_time(ctx: SolarContext) -> float:
    """Equation of time in minutes."""
    mean_long = radians(geom_mean_long_sun(ctx))
    mean_anom = radians(geom_mean_anom_sun(ctx))
    ecc = eccent_earth_orbit(ctx)

    total = (
        _VAR_Y * sin(2.0 * mean_long)
        - 2.0 * ecc * sin(mean_anom)
        + 4.0 * ecc * _VAR_Y * sin(mean_anom) * cos(2.0 * mean_long)
        - 0.5 * _VAR_Y**2 * sin(4.0 * mean_long)
        - 1.25 * ecc**2 * sin(2.0 * mean_anom)
    )
    return 4.0 * degrees(total)


def sun_equation_of_center(ctx: SolarContext) -> float:
    """Equation of center of the sun in degrees."""
    mean_anom = radians(geom_mean_anom_sun(ctx))
    jc = julian_century(ctx)
    return (
        sin(mean_anom) * (1.914602 - jc * (0.004817 + 0.000014 * jc))
        + sin(2.0 * mean_anom) * (0.019993 - 0.000101 * jc)
        + sin(3.0 * mean_anom) * 0.000289
    )


def sun_true_longitude(ctx: SolarContext) -> float:
    return geom_mean_long_sun(ctx) + sun_equation_of_center(ctx)


def sun_apparent_longitude(ctx: SolarContext) -> float:
    """True longitude corrected for nutation and aberration."""
    jc = julian_century(ctx)
    return sun_true_longitude(ctx) - 0.00569 - 0.00478 * sin(radians(_nutation_angle(jc)))


def mean_obliq_ecliptic(ctx: SolarContext) -> float:
    """Mean obliquity of the ecliptic in degrees."""
    jc = julian_century(ctx)
    seconds = 21.448 - jc * (46.815 + jc * (0.00059 - jc * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def oblique_correction(ctx: SolarContext) -> float:
    jc = julian_century(ctx)
    return mean_obliq_ecliptic(ctx) + 0.00256 * cos(radians(_nutation_angle(jc)))


def solar_noon(ctx: SolarContext) -> float:
    """Local clock time of meridian transit as a fraction of the day."""
    return (
        720.0 - 4.0 * ctx.longitude - equation_of_time(ctx) + ctx.utc_offset_hours * 60.0
    ) / MINUTES_PER_DAY


def true_solar_time(ctx: SolarContext) -> float:
    """Minutes since true solar midnight, in [0, 1440)."""
    minutes = (
        ctx.day_time * MINUTES_PER_DAY
        + equation_of_time(ctx)
        + 4.0 * ctx.longitude
        - 60.0 * ctx.utc_offset_hours
    )
    return wrap(minutes, MINUTES_PER_DAY)


def solar_declination(ctx: SolarContext) -> float:
    obliquity = radians(oblique_correction(ctx))
    apparent_long = radians(sun_apparent_longitude(ctx))
    return degrees(asin(sin(obliquity) * sin(apparent_long)))


def sun_hour_angle(ctx: SolarContext) -> float:
    """Hour angle in degrees; negative before solar noon."""
    return true_solar_time(ctx) / 4.0 - 180.0


def solar_zenith_angle(ctx: SolarContext) -> float:
    lat_rad = radians(ctx.latitude)
    decl_rad = radians(solar_declination(ctx))
    hour_rad = radians(sun_hour_angle(ctx))
    cos_zenith = sin(lat_rad) * sin(decl_rad) + cos(lat_rad) * cos(decl_rad) * cos(hour_rad)
    return degrees(acos(_clamp_unit(cos_zenith)))


def solar_azimuth_angle(ctx: SolarContext) -> float | DegenerateAzimuth:
    """Solar azimuth clockwise from north in [0, 360).

    Returns `DegenerateAzimuth` when the sun is at the zenith or the observer
    stands on a pole, where the bearing is undefined.
    """
    hour_angle = sun_hour_angle(ctx)
    zenith = solar_zenith_angle(ctx)
    lat_rad = radians(ctx.latitude)
    zenith_rad = radians(zenith)
    decl_rad = radians(solar_declination(ctx))

    denominator = cos(lat_rad) * sin(zenith_rad)
    if abs(denominator) < _AZIMUTH_DENOMINATOR_EPS:
        return DegenerateAzimuth(zenith_deg=zenith, denominator=denominator)

    numerator = sin(lat_rad) * cos(zenith_rad) - sin(decl_rad)
    formula = degrees(acos(_clamp_unit(numerator / denominator)))

    if hour_angle > 0.0:
        azimuth = formula + 180.0
    else:
        azimuth = 540.0 - formula
    return wrap(azimuth, 360.0)


def solar_incidence_angle(ctx: SolarContext) -> float:
    """Solar elevation above the horizon in degrees (90 - zenith)."""
    return 90.0 - solar_zenith_angle(ctx)
