"""Route segmentation: split a polyline into view-dependent sub-segments."""
from __future__ import annotations

from math import ceil
from typing import List, Sequence, Tuple

from rough_ride.contracts.segment_contract import LatLon, Segment
from rough_ride.core.models import ViewContext
from rough_ride.geo.distance import haversine_m

BASE_CHUNK_M = 5.0

# Haversine noise must not add a sliver sub-segment (1000 m / 5 m is 200, not 201)
_SPLIT_EPS = 1e-9

# (zoom below, floor in metres), checked in order
_ZOOM_FLOORS: Tuple[Tuple[float, float], ...] = (
    (10.0, 500.0),
    (12.0, 200.0),
    (14.0, 50.0),
)

# (camera distance above, floor in metres), checked in order
_CAMERA_FLOORS: Tuple[Tuple[float, float], ...] = (
    (50_000.0, 500.0),
    (10_000.0, 100.0),
    (3_000.0, 25.0),
)


# ---------------------------------------------------------------------------
# Level-of-detail policy
# ---------------------------------------------------------------------------

def zoom_floor_m(zoom: float) -> float:
    for below, floor_m in _ZOOM_FLOORS:
        if zoom < below:
            return floor_m
    return BASE_CHUNK_M


def camera_floor_m(dist_to_camera_m: float) -> float:
    for above, floor_m in _CAMERA_FLOORS:
        if dist_to_camera_m > above:
            return floor_m
    return BASE_CHUNK_M


def chunk_size_m(zoom: float, dist_to_camera_m: float) -> float:
    """Coarsest of the base chunk, the zoom floor and the camera floor."""
    return max(BASE_CHUNK_M, zoom_floor_m(zoom), camera_floor_m(dist_to_camera_m))


def _interpolate_point(a: LatLon, b: LatLon, frac: float) -> LatLon:
    """Linear interpolation between two geographic points (frac in [0,1])."""
    return (a[0] + frac * (b[0] - a[0]), a[1] + frac * (b[1] - a[1]))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def segment_route(route: Sequence[LatLon], view: ViewContext) -> List[Segment]:
    """
    Split each leg A->B of *route* into equal sub-segments.

    The chunk size for a leg depends on the view zoom and on how far A is from
    the camera, so legs near the camera get a fine gradient and distant or
    zoomed-out legs stay cheap. Repeated points produce a single zero-length
    sub-segment (it will never match a sample and is left to gap filling).
    """
    segments: List[Segment] = []
    camera = (view.camera_lat, view.camera_lon)

    for i in range(len(route) - 1):
        a = (float(route[i][0]), float(route[i][1]))
        b = (float(route[i + 1][0]), float(route[i + 1][1]))

        seg_len = haversine_m(a, b)
        chunk = chunk_size_m(view.zoom_level, haversine_m(camera, a))
        n = max(1, ceil(seg_len / chunk - _SPLIT_EPS))

        for k in range(n):
            segments.append(
                Segment(
                    start=_interpolate_point(a, b, k / n),
                    end=_interpolate_point(a, b, (k + 1) / n),
                    chunk_size_m=chunk,
                )
            )

    return segments
