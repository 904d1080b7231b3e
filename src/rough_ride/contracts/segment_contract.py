# path: rough-ride/src/rough_ride/contracts/segment_contract.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

LatLon = Tuple[float, float]
RGB = Tuple[int, int, int]


@dataclass
class Segment:
    """One sub-segment of a route, owned by a single recomputation pass."""
    start: LatLon
    end: LatLon
    chunk_size_m: float
    color: Optional[RGB] = None
    computed: bool = False  # True only when colored from nearby samples

    @property
    def midpoint(self) -> LatLon:
        return (
            (self.start[0] + self.end[0]) / 2,
            (self.start[1] + self.end[1]) / 2,
        )


@dataclass(frozen=True)
class ColoredSegment:
    start: LatLon
    end: LatLon
    color: RGB


@dataclass(frozen=True)
class ColoredPoint:
    lat: float
    lon: float
    color: RGB
    adjusted_roughness: float
    heading: Optional[float] = None
    speed: Optional[float] = None
    directional: bool = False  # heading present and moving (speed > 1)
