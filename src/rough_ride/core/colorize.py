"""Assign each sub-segment the distance-weighted roughness of nearby samples."""
from __future__ import annotations

from typing import List, Sequence, Tuple

from rough_ride.contracts.segment_contract import Segment
from rough_ride.core.colors import color_for
from rough_ride.core.models import RoughnessConfig, RoughnessSample
from rough_ride.core.scoring import adjusted_roughness
from rough_ride.geo.distance import perpendicular_distance_m

# Bounding-box prefilter around the sub-segment midpoint (~20 m)
BBOX_DEG = 0.0002
MIN_SEARCH_RADIUS_M = 10.0


def search_radius_m(chunk_size_m: float) -> float:
    return max(MIN_SEARCH_RADIUS_M, chunk_size_m / 2)


def colorize_segments(
    segments: List[Segment],
    samples: Sequence[RoughnessSample],
    config: RoughnessConfig,
) -> List[Segment]:
    """
    Color sub-segments in place from samples whose perpendicular foot lies on
    them within the search radius. Weight is ``1 / (d + 1)``.

    Segments with no qualifying sample keep ``color=None`` for the gap filler.
    Returns *segments* for chaining.
    """
    # (lat, lon, adjusted) computed once per pass
    points: List[Tuple[float, float, float]] = [
        (s.lat, s.lon, adjusted_roughness(s, config)) for s in samples
    ]

    for seg in segments:
        mid_lat, mid_lon = seg.midpoint
        radius = search_radius_m(seg.chunk_size_m)

        weighted = 0.0
        total_w = 0.0
        for lat, lon, adj in points:
            if abs(lat - mid_lat) > BBOX_DEG or abs(lon - mid_lon) > BBOX_DEG:
                continue

            d = perpendicular_distance_m((lat, lon), seg.start, seg.end)
            if d <= radius:
                w = 1.0 / (d + 1.0)
                weighted += adj * w
                total_w += w

        if total_w > 0:
            seg.color = color_for(weighted / total_w)
            seg.computed = True

    return segments
