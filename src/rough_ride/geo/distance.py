"""Distance primitives on WGS-84 coordinates given as (lat, lon) tuples."""
from __future__ import annotations

import math
from math import atan2, cos, radians, sin, sqrt
from typing import Tuple

EARTH_RADIUS_M = 6_371_000.0

# Returned by perpendicular_distance_m when a point has no foot on the segment
NO_INFLUENCE = math.inf


def haversine_m(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Great-circle distance in metres between two WGS-84 points."""
    lat1r, lon1r, lat2r, lon2r = map(radians, [a[0], a[1], b[0], b[1]])
    dlat = lat2r - lat1r
    dlon = lon2r - lon1r
    h = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_M * 2 * atan2(sqrt(h), sqrt(1 - h))


def perpendicular_distance_m(
    point: Tuple[float, float],
    seg_start: Tuple[float, float],
    seg_end: Tuple[float, float],
) -> float:
    """
    Distance in metres from *point* to its perpendicular foot on the segment.

    Works in a local equirectangular projection (longitude scaled by the
    cosine of the segment's mean latitude). Returns ``NO_INFLUENCE`` when the
    segment is degenerate or the foot falls outside the segment, i.e. the
    projection parameter ``t`` is not in [0, 1]. Endpoint distance is never
    used as a substitute.
    """
    lat1, lon1 = radians(seg_start[0]), radians(seg_start[1])
    lat2, lon2 = radians(seg_end[0]), radians(seg_end[1])
    lat3, lon3 = radians(point[0]), radians(point[1])

    cos_lat = cos((lat1 + lat2) / 2)

    # Segment start is the local origin
    x2 = (lon2 - lon1) * cos_lat
    y2 = lat2 - lat1
    x3 = (lon3 - lon1) * cos_lat
    y3 = lat3 - lat1

    l2 = x2 * x2 + y2 * y2
    if l2 == 0:
        return NO_INFLUENCE

    t = (x3 * x2 + y3 * y2) / l2
    if t < 0 or t > 1:
        return NO_INFLUENCE

    dx = x3 - t * x2
    dy = y3 - t * y2
    return sqrt(dx * dx + dy * dy) * EARTH_RADIUS_M
