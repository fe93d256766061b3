"""Incidence on tilted surfaces and irradiance projection."""

from __future__ import annotations

from math import acos, cos, degrees, radians, sin

from solarcalc.astro.noaa import solar_declination, sun_hour_angle
from solarcalc.contracts import SolarContext

_GRAZING_COS_EPS = 1e-12


def incidence_on_tilted_surface(
    ctx: SolarContext, surface_angle: float, surface_azimuth: float
) -> float:
    """Angle between the sun beam and the normal of a tilted plane, in degrees.

    Args:
        ctx: Location and instant.
        surface_angle: Tilt of the plane from horizontal in degrees.
        surface_azimuth: Orientation of the plane's normal in degrees from
            south, east negative and west positive (0 faces the equator in
            the northern hemisphere).
    """
    lat_rad = radians(ctx.latitude)
    decl_rad = radians(solar_declination(ctx))
    hour_rad = radians(sun_hour_angle(ctx))
    tilt_rad = radians(surface_angle)
    azimuth_rad = radians(surface_azimuth)

    cos_incidence = (
        sin(lat_rad) * sin(decl_rad) * cos(tilt_rad)
        - cos(lat_rad) * sin(decl_rad) * cos(azimuth_rad) * sin(tilt_rad)
        + cos(lat_rad) * cos(decl_rad) * cos(hour_rad) * cos(tilt_rad)
        + sin(lat_rad) * cos(decl_rad) * cos(hour_rad) * sin(tilt_rad) * cos(azimuth_rad)
        + cos(decl_rad) * sin(hour_rad) * sin(tilt_rad) * sin(azimuth_rad)
    )
    return degrees(acos(min(1.0, max(-1.0, cos_incidence))))


def effective_irradiance(horizontal_irradiance: float, incidence_angle_deg: float) -> float:
    """Project irradiance onto a surface; zero once the sun is at or behind the plane."""
    cosine_factor = cos(radians(incidence_angle_deg))
    if cosine_factor <= _GRAZING_COS_EPS:
        return 0.0
    return horizontal_irradiance * cosine_factor
