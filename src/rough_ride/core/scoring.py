from __future__ import annotations

from typing import List, Literal, Optional, Sequence

from rough_ride.contracts.segment_contract import ColoredPoint
from rough_ride.core.colors import bucket_color_for, color_for
from rough_ride.core.models import RoughnessConfig, RoughnessSample


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


def adjust_roughness(
    raw: float,
    speed: Optional[float],
    sensitivity: float,
    speed_influence: float,
    min_speed: float = 20.0,
    max_speed: float = 100.0,
) -> float:
    """
    Scale raw roughness by sensitivity and discount it at higher speed.

    The same bump reads as less severe the faster you go over it, so the
    discount ramps linearly from 0 at ``min_speed`` to ``speed_influence`` at
    ``max_speed``. No speed -> no discount.
    """
    adjusted = raw * sensitivity
    if speed is not None:
        factor = _clamp01((speed - min_speed) / max(1e-6, (max_speed - min_speed)))
        adjusted *= 1 - factor * speed_influence
    return adjusted


def adjusted_roughness(sample: RoughnessSample, config: RoughnessConfig) -> float:
    return adjust_roughness(
        sample.raw_roughness,
        sample.speed,
        config.sensitivity,
        config.speed_influence,
        min_speed=config.min_speed,
        max_speed=config.max_speed,
    )


def color_points(
    samples: Sequence[RoughnessSample],
    config: RoughnessConfig,
    palette: Literal["gradient", "bucket"] = "gradient",
) -> List[ColoredPoint]:
    """Marker colors, one per sample, independent of any route."""
    pick = bucket_color_for if palette == "bucket" else color_for
    out: List[ColoredPoint] = []
    for s in samples:
        adj = adjusted_roughness(s, config)
        out.append(
            ColoredPoint(
                lat=s.lat,
                lon=s.lon,
                color=pick(adj),
                adjusted_roughness=adj,
                heading=s.heading,
                speed=s.speed,
                directional=s.heading is not None and (s.speed or 0.0) > 1,
            )
        )
    return out
