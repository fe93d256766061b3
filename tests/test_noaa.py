"""Tests for the NOAA solar position chain."""

from __future__ import annotations

from datetime import date
from math import isfinite

import pytest

from solarcalc.astro import noaa
from solarcalc.astro.summary import compute_snapshot
from solarcalc.contracts import DegenerateAzimuth, SolarContext


def _ctx(
    lat: float = 0.0,
    lon: float = 0.0,
    day: date = date(2024, 3, 20),
    day_time: float = 0.5,
    offset: float = 0.0,
) -> SolarContext:
    return SolarContext(latitude=lat, longitude=lon, date=day, day_time=day_time, utc_offset_hours=offset)


def test_julian_day_matches_noaa_worksheet_example() -> None:
    """2010-06-21 00:06 local at UTC-6 is JD 2455368.75417."""
    ctx = _ctx(lat=40.0, lon=-105.0, day=date(2010, 6, 21), day_time=0.1 / 24.0, offset=-6.0)
    assert noaa.julian_day(ctx) == pytest.approx(2455368.5 + 0.1 / 24.0 + 0.25, abs=1e-9)


def test_j2000_epoch_reference_values() -> None:
    """At J2000.0 the polynomials reduce to their constant terms."""
    ctx = _ctx(day=date(2000, 1, 1), day_time=0.5)

    assert noaa.julian_day(ctx) == 2451545.0
    assert noaa.julian_century(ctx) == 0.0
    assert noaa.geom_mean_long_sun(ctx) == pytest.approx(280.46646)
    assert noaa.geom_mean_anom_sun(ctx) == pytest.approx(357.52911)
    assert noaa.eccent_earth_orbit(ctx) == pytest.approx(0.016708634)
    assert noaa.mean_obliq_ecliptic(ctx) == pytest.approx(23.0 + (26.0 + 21.448 / 60.0) / 60.0)
    assert -3.5 < noaa.equation_of_time(ctx) < -3.1


def test_julian_day_falls_back_to_zero_for_non_calendar_date() -> None:
    """A context whose date was forced to a non-date yields the 0 sentinel."""
    ctx = _ctx()
    object.__setattr__(ctx, "date", "not-a-date")
    assert noaa.julian_day(ctx) == 0.0


def test_declination_near_zero_at_equinox_equator() -> None:
    """Declination is within half a degree of zero on the March equinox."""
    assert abs(noaa.solar_declination(_ctx())) < 0.5


def test_declination_near_tilt_at_june_solstice() -> None:
    """Declination peaks near the obliquity on the June solstice."""
    ctx = _ctx(lat=40.0, lon=-105.0, day=date(2010, 6, 21), day_time=0.1 / 24.0, offset=-6.0)
    assert noaa.solar_declination(ctx) == pytest.approx(23.44, abs=0.05)


def test_zenith_near_overhead_at_equator_noon_on_equinox() -> None:
    """Sun is nearly overhead at equatorial noon around the equinox."""
    zenith = noaa.solar_zenith_angle(_ctx())
    assert 0.0 <= zenith <= 5.0
    assert noaa.solar_incidence_angle(_ctx()) == pytest.approx(90.0 - zenith)


def test_hour_angle_sign_follows_solar_noon() -> None:
    """Hour angle is negative in the morning and positive in the afternoon."""
    assert noaa.sun_hour_angle(_ctx(day_time=0.3)) < 0.0
    assert noaa.sun_hour_angle(_ctx(day_time=0.7)) > 0.0


def test_solar_noon_shifts_with_longitude() -> None:
    """Solar noon moves 4 minutes earlier per degree east."""
    west = noaa.solar_noon(_ctx(lon=0.0))
    east = noaa.solar_noon(_ctx(lon=15.0))
    assert (west - east) * 1440.0 == pytest.approx(60.0, abs=1e-9)


def test_azimuth_quadrants_mid_latitude() -> None:
    """Morning sun lies east, noon sun south and afternoon sun west at 40N."""
    morning = noaa.solar_azimuth_angle(_ctx(lat=40.0, day_time=0.3))
    noon = noaa.solar_azimuth_angle(_ctx(lat=40.0, day_time=0.5))
    afternoon = noaa.solar_azimuth_angle(_ctx(lat=40.0, day_time=0.7))

    assert 60.0 < morning < 140.0
    assert abs(noon - 180.0) < 10.0
    assert 220.0 < afternoon < 300.0


@pytest.mark.parametrize("lat", [90.0, -90.0])
def test_azimuth_is_degenerate_at_the_poles(lat: float) -> None:
    """Azimuth is undefined at a pole and reported as a tagged outcome."""
    result = noaa.solar_azimuth_angle(_ctx(lat=lat))
    assert isinstance(result, DegenerateAzimuth)
    assert isfinite(result.zenith_deg)


def test_true_solar_time_wraps_negative_minutes() -> None:
    """Far-west longitude with a large positive offset still lands in [0, 1440)."""
    ctx = _ctx(lon=-180.0, day_time=0.0, offset=14.0)
    assert 0.0 <= noaa.true_solar_time(ctx) < 1440.0


def test_ranges_hold_over_valid_input_grid() -> None:
    """Every derived quantity is finite or a tagged outcome, and wrapped values stay in range."""
    dates = [date(1950, 2, 28), date(2000, 1, 1), date(2024, 6, 21), date(2024, 12, 21), date(2099, 12, 31)]
    for day in dates:
        for lat in (-90.0, -66.5, -45.0, 0.0, 23.4, 80.0, 90.0):
            for lon in (-180.0, 0.0, 180.0):
                for day_time in (0.0, 0.25, 0.5, 1.0):
                    for offset in (-12.0, 0.0, 14.0):
                        ctx = _ctx(lat=lat, lon=lon, day=day, day_time=day_time, offset=offset)
                        assert 0.0 <= noaa.geom_mean_long_sun(ctx) < 360.0
                        assert 0.0 <= noaa.true_solar_time(ctx) < 1440.0
                        azimuth = noaa.solar_azimuth_angle(ctx)
                        if not isinstance(azimuth, DegenerateAzimuth):
                            assert 0.0 <= azimuth < 360.0
                        assert isfinite(noaa.solar_zenith_angle(ctx))
                        assert isfinite(noaa.solar_declination(ctx))


def test_wrap_never_returns_the_period() -> None:
    """Tiny negative values wrap to a value strictly below the period."""
    assert 0.0 <= noaa.wrap(-1e-17, 360.0) < 360.0
    assert noaa.wrap(-90.0, 360.0) == 270.0
    assert noaa.wrap(1500.0, 1440.0) == 60.0


def test_derivations_are_deterministic() -> None:
    """Repeated evaluation of the same context is bit-identical."""
    ctx = _ctx(lat=-33.8688, lon=151.2093, day=date(2024, 12, 1), day_time=0.41, offset=11.0)
    assert compute_snapshot(ctx) == compute_snapshot(ctx)
    assert noaa.equation_of_time(ctx) == noaa.equation_of_time(ctx)
