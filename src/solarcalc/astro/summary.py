"""One-shot evaluation of the whole NOAA chain."""

from __future__ import annotations

from solarcalc.astro import noaa
from solarcalc.astro.events import sunrise_and_sunset
from solarcalc.contracts import SolarContext, SolarSnapshot


def compute_snapshot(ctx: SolarContext) -> SolarSnapshot:
    """Evaluate every derived quantity for `ctx`."""
    return SolarSnapshot(
        context=ctx,
        julian_day=noaa.julian_day(ctx),
        julian_century=noaa.julian_century(ctx),
        equation_of_time_min=noaa.equation_of_time(ctx),
        solar_declination_deg=noaa.solar_declination(ctx),
        solar_noon=noaa.solar_noon(ctx),
        true_solar_time_min=noaa.true_solar_time(ctx),
        hour_angle_deg=noaa.sun_hour_angle(ctx),
        zenith_deg=noaa.solar_zenith_angle(ctx),
        elevation_deg=noaa.solar_incidence_angle(ctx),
        azimuth=noaa.solar_azimuth_angle(ctx),
        sun_times=sunrise_and_sunset(ctx),
    )
