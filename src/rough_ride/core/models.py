from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoughnessConfig(BaseModel):
    """Tunables read by the core. Immutable: one instance per recomputation."""

    model_config = ConfigDict(frozen=True)

    sensitivity: float = Field(default=1.0, ge=0.5, le=3.0)
    speed_influence: float = Field(default=0.5, ge=0.0, le=1.0)

    # Speed window (km/h) over which the speed discount ramps in
    min_speed: float = 20.0
    max_speed: float = 100.0

    # Motion scoring
    gravity: float = 9.8
    deviation_cap: float = 5.0
    score_window_ms: int = 500


class RoughnessSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(allow_inf_nan=False)
    lon: float = Field(allow_inf_nan=False)
    timestamp: float = 0.0  # epoch millis
    raw_roughness: float = Field(ge=0.0, le=10.0)

    speed: Optional[float] = Field(default=None, ge=0.0, description="km/h")
    heading: Optional[float] = Field(default=None, ge=0.0, lt=360.0)


class ViewContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Renderers that have not reported a zoom yet get the street-level default
    zoom_level: float = 15.0
    camera_lat: float = 0.0
    camera_lon: float = 0.0


class MotionSample(BaseModel):
    """One accelerometer reading, acceleration including gravity (m/s²)."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t_ms: float
