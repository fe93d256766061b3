"""FastAPI app exposing NOAA solar geometry endpoints."""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from solarcalc.astro.events import sunrise_and_sunset
from solarcalc.astro.irradiance import effective_irradiance, incidence_on_tilted_surface
from solarcalc.astro.summary import compute_snapshot
from solarcalc.contracts import SolarContext, SolarValidationError, sun_times_to_dict
from solarcalc.orchestrate.batch import GridSpec, day_profile, sun_times_grid
from solarcalc.time.zones import UnknownTimeZoneError, context_for_zone

_log = logging.getLogger(__name__)

_DEFAULT_MAX_PROFILE_SAMPLES = 1441
_DEFAULT_MAX_GRID_POINTS = 5_000


class LocationRequest(BaseModel):
    """Location, date and local time shared by every endpoint."""

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    date: date
    day_time: float = Field(default=0.5, ge=0.0, le=1.0)
    utc_offset_hours: float | None = Field(default=None, ge=-12.0, le=14.0)
    time_zone: str | None = None

    @model_validator(mode="after")
    def validate_offset_source(self) -> "LocationRequest":
        """Reject requests that pin both a numeric offset and a zone."""
        if self.utc_offset_hours is not None and self.time_zone is not None:
            raise ValueError("give either utc_offset_hours or time_zone, not both")
        return self


class IncidenceRequest(LocationRequest):
    """Tilted-surface orientation and reference irradiance."""

    surface_angle: float = Field(default=0.0, ge=0.0, le=180.0)
    surface_azimuth: float = Field(default=0.0, ge=-180.0, le=180.0)
    horizontal_irradiance: float = Field(default=1000.0, ge=0.0)


class ProfileRequest(IncidenceRequest):
    """Day profile request."""

    samples: int = Field(default=97, ge=2)


class GridSpecRequest(BaseModel):
    """Request-level grid specification for sun-times over a region."""

    lat_min: float = Field(ge=-90.0, le=90.0)
    lat_max: float = Field(ge=-90.0, le=90.0)
    lon_min: float = Field(ge=-180.0, le=180.0)
    lon_max: float = Field(ge=-180.0, le=180.0)
    step_deg: float = Field(gt=0.0, le=90.0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "GridSpecRequest":
        """Validate coordinate bounds and ordering."""
        if self.lat_min > self.lat_max:
            raise ValueError("lat_min must be <= lat_max")
        if self.lon_min > self.lon_max:
            raise ValueError("lon_min must be <= lon_max")
        return self


class GridRequest(BaseModel):
    """Sun times for every point of a grid on one date."""

    date: date
    utc_offset_hours: float = Field(default=0.0, ge=-12.0, le=14.0)
    grid_spec: GridSpecRequest


class SunTimesResponse(BaseModel):
    """Sunrise/sunset in local clock hours, or the polar condition."""

    sunrise_hours: float | None
    sunset_hours: float | None
    day_length_hours: float
    polar_condition: str | None


class IncidenceResponse(BaseModel):
    """Incidence on the surface and the irradiance it receives."""

    incidence_deg: float
    elevation_deg: float
    effective_irradiance: float


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def _build_context(payload: LocationRequest, default_zone: str | None) -> SolarContext:
    """Build a validated context, mapping collaborator failures to HTTP 422."""
    zone = payload.time_zone
    if zone is None and payload.utc_offset_hours is None:
        zone = default_zone
    try:
        if zone is not None:
            return context_for_zone(payload.lat, payload.lon, payload.day_time, zone, payload.date)
        return SolarContext(
            latitude=payload.lat,
            longitude=payload.lon,
            date=payload.date,
            day_time=payload.day_time,
            utc_offset_hours=payload.utc_offset_hours or 0.0,
        )
    except (SolarValidationError, UnknownTimeZoneError) as exc:
        _log.info("rejected request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def create_app() -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="solarcalc API", version="0.1.0")

    max_profile_samples = _env_int("SOLARCALC_MAX_PROFILE_SAMPLES", _DEFAULT_MAX_PROFILE_SAMPLES)
    max_grid_points = _env_int("SOLARCALC_MAX_GRID_POINTS", _DEFAULT_MAX_GRID_POINTS)
    default_zone = os.getenv("SOLARCALC_DEFAULT_TIME_ZONE") or None

    app.state.max_profile_samples = max_profile_samples
    app.state.max_grid_points = max_grid_points
    app.state.default_zone = default_zone

    @app.get("/health")
    def get_health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/position")
    def post_position(payload: LocationRequest) -> dict[str, Any]:
        """Return every derived NOAA quantity for the request instant."""
        ctx = _build_context(payload, default_zone)
        return compute_snapshot(ctx).to_dict()

    @app.post("/sun-times", response_model=SunTimesResponse)
    def post_sun_times(payload: LocationRequest) -> SunTimesResponse:
        """Return sunrise, sunset and day length."""
        ctx = _build_context(payload, default_zone)
        return SunTimesResponse(**sun_times_to_dict(sunrise_and_sunset(ctx)))

    @app.post("/incidence", response_model=IncidenceResponse)
    def post_incidence(payload: IncidenceRequest) -> IncidenceResponse:
        """Return incidence on a tilted surface and the projected irradiance."""
        ctx = _build_context(payload, default_zone)
        snapshot = compute_snapshot(ctx)
        incidence = incidence_on_tilted_surface(ctx, payload.surface_angle, payload.surface_azimuth)
        irradiance = 0.0
        if snapshot.elevation_deg > 0.0:
            irradiance = effective_irradiance(payload.horizontal_irradiance, incidence)
        return IncidenceResponse(
            incidence_deg=incidence,
            elevation_deg=snapshot.elevation_deg,
            effective_irradiance=irradiance,
        )

    @app.post("/profile")
    def post_profile(payload: ProfileRequest) -> dict[str, Any]:
        """Return the day profile sampled at `samples` evenly spaced times."""
        if payload.samples > max_profile_samples:
            raise HTTPException(
                status_code=422,
                detail=f"samples must be <= {max_profile_samples}",
            )
        ctx = _build_context(payload, default_zone)
        profile = day_profile(
            ctx,
            samples=payload.samples,
            surface_angle=payload.surface_angle,
            surface_azimuth=payload.surface_azimuth,
            horizontal_irradiance=payload.horizontal_irradiance,
        )
        return profile.to_dict()

    @app.post("/grid/sun-times")
    def post_grid_sun_times(payload: GridRequest) -> dict[str, Any]:
        """Return sun times for every point of the request grid."""
        spec = GridSpec(max_points=max_grid_points, **payload.grid_spec.model_dump())
        try:
            rows = sun_times_grid(payload.date, spec, utc_offset_hours=payload.utc_offset_hours)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {"count": len(rows), "points": rows}

    return app
