"""Batch evaluation over lat/lon grids and over the hours of one day."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import floor
from typing import Any

import numpy as np

from solarcalc.astro import noaa
from solarcalc.astro.events import sunrise_and_sunset
from solarcalc.astro.irradiance import effective_irradiance, incidence_on_tilted_surface
from solarcalc.contracts import DegenerateAzimuth, SolarContext, sun_times_to_dict

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridSpec:
    """Lat/lon grid specification for batch evaluation."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float
    step_deg: float
    max_points: int | None = None


def _axis_count(start: float, stop: float, step: float) -> int:
    """Number of values `_frange_inclusive` yields, without building them."""
    if step <= 0.0:
        raise ValueError("step must be positive.")
    if start > stop:
        raise ValueError("start must be <= stop.")
    return floor((stop - start) / step + 1e-9) + 1


def _frange_inclusive(start: float, stop: float, step: float) -> list[float]:
    """Build an inclusive floating-point range with deterministic rounding."""
    _axis_count(start, stop, step)

    values: list[float] = []
    current = start
    while current <= stop + 1e-9:
        values.append(round(current, 6))
        current += step
    return values


def generate_lat_lon_grid(spec: GridSpec) -> list[tuple[float, float]]:
    """Generate `(lat, lon)` points from the input grid specification."""
    point_count = _axis_count(spec.lat_min, spec.lat_max, spec.step_deg) * _axis_count(
        spec.lon_min, spec.lon_max, spec.step_deg
    )
    if spec.max_points is not None and point_count > spec.max_points:
        raise ValueError("grid points exceed max_points safety cap")
    lats = _frange_inclusive(spec.lat_min, spec.lat_max, spec.step_deg)
    lons = _frange_inclusive(spec.lon_min, spec.lon_max, spec.step_deg)
    return [(lat, lon) for lat in lats for lon in lons]


def sun_times_grid(
    on_date: object,
    spec: GridSpec,
    utc_offset_hours: float = 0.0,
    day_time: float = 0.5,
) -> list[dict[str, Any]]:
    """Sunrise/sunset (or polar condition) for every grid point on one date."""
    rows: list[dict[str, Any]] = []
    for lat, lon in generate_lat_lon_grid(spec):
        ctx = SolarContext(
            latitude=lat,
            longitude=lon,
            date=on_date,
            day_time=day_time,
            utc_offset_hours=utc_offset_hours,
        )
        row: dict[str, Any] = {"lat": lat, "lon": lon}
        row.update(sun_times_to_dict(sunrise_and_sunset(ctx)))
        rows.append(row)
    _log.debug("evaluated sun times for %d grid points", len(rows))
    return rows


@dataclass(frozen=True)
class DayProfile:
    """Solar geometry sampled uniformly over one local day.

    `azimuth_deg` holds NaN exactly where `azimuth_degenerate` is set.
    """

    day_time: np.ndarray
    zenith_deg: np.ndarray
    elevation_deg: np.ndarray
    azimuth_deg: np.ndarray
    azimuth_degenerate: np.ndarray
    incidence_deg: np.ndarray
    effective_irradiance: np.ndarray

    @property
    def daily_insolation_wh(self) -> float:
        """Integral of effective irradiance over the day, in Wh per unit area."""
        hours = self.day_time * 24.0
        return float(np.trapezoid(self.effective_irradiance, hours))

    def to_dict(self) -> dict[str, Any]:
        azimuth = [
            None if degenerate else float(value)
            for value, degenerate in zip(self.azimuth_deg, self.azimuth_degenerate)
        ]
        return {
            "day_time": self.day_time.tolist(),
            "zenith_deg": self.zenith_deg.tolist(),
            "elevation_deg": self.elevation_deg.tolist(),
            "azimuth_deg": azimuth,
            "incidence_deg": self.incidence_deg.tolist(),
            "effective_irradiance": self.effective_irradiance.tolist(),
            "daily_insolation_wh": self.daily_insolation_wh,
        }


def day_profile(
    ctx: SolarContext,
    samples: int = 97,
    surface_angle: float = 0.0,
    surface_azimuth: float = 0.0,
    horizontal_irradiance: float = 1000.0,
) -> DayProfile:
    """Sample the context's day at `samples` evenly spaced times in [0, 1]."""
    if samples < 2:
        raise ValueError("samples must be at least 2")

    day_time = np.linspace(0.0, 1.0, samples)
    zenith = np.empty(samples)
    azimuth = np.full(samples, np.nan)
    degenerate = np.zeros(samples, dtype=bool)
    incidence = np.empty(samples)
    irradiance = np.empty(samples)

    for i, fraction in enumerate(day_time):
        sample = ctx.with_day_time(float(fraction))
        zenith[i] = noaa.solar_zenith_angle(sample)
        bearing = noaa.solar_azimuth_angle(sample)
        if isinstance(bearing, DegenerateAzimuth):
            degenerate[i] = True
        else:
            azimuth[i] = bearing
        incidence[i] = incidence_on_tilted_surface(sample, surface_angle, surface_azimuth)
        # Beam below the horizon contributes nothing even if it faces the plane.
        if zenith[i] >= 90.0:
            irradiance[i] = 0.0
        else:
            irradiance[i] = effective_irradiance(horizontal_irradiance, incidence[i])

    return DayProfile(
        day_time=day_time,
        zenith_deg=zenith,
        elevation_deg=90.0 - zenith,
        azimuth_deg=azimuth,
        azimuth_degenerate=degenerate,
        incidence_deg=incidence,
        effective_irradiance=irradiance,
    )
