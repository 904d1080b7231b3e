from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, FiniteFloat

from rough_ride.cache import keys
from rough_ride.cache.redis_client import cache_get_json, cache_set_json
from rough_ride.contracts.segment_contract import ColoredSegment
from rough_ride.core.colorize import colorize_segments
from rough_ride.core.gap_fill import fill_gaps
from rough_ride.core.models import RoughnessConfig, RoughnessSample, ViewContext
from rough_ride.core.route import segment_route

log = logging.getLogger(__name__)


class RouteSnapshot(BaseModel):
    """Everything one recomputation reads. Frozen, so it is safe to hand to a
    background thread while the caller keeps building the next one."""

    model_config = ConfigDict(frozen=True)

    route: Tuple[Tuple[FiniteFloat, FiniteFloat], ...] = ()
    samples: Tuple[RoughnessSample, ...] = ()
    view: ViewContext = ViewContext()
    config: RoughnessConfig = RoughnessConfig()


def run_pipeline(snapshot: RouteSnapshot) -> List[ColoredSegment]:
    """Segment -> colorize -> gap fill. Pure in *snapshot*."""
    segments = segment_route(snapshot.route, snapshot.view)
    colorize_segments(segments, snapshot.samples, snapshot.config)
    fill_gaps(segments)
    return [ColoredSegment(start=s.start, end=s.end, color=s.color) for s in segments]


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------

def _encode(segments: List[ColoredSegment]) -> list:
    return [[list(s.start), list(s.end), list(s.color)] for s in segments]


def _decode(raw: list) -> List[ColoredSegment]:
    return [
        ColoredSegment(start=tuple(a), end=tuple(b), color=tuple(c))
        for a, b, c in raw
    ]


class RouteColorCache:
    """
    Two-level memo for ``run_pipeline``.

    L1 is an in-process LRU keyed by snapshot hash; L2 is Redis when
    configured (shared between API workers). Identical snapshots never
    recompute while either level still holds them. Entries are stored as
    tuples and every caller gets its own list, so no caller can alter what
    the next lookup sees.
    """

    def __init__(
        self,
        max_entries: int = 64,
        ttl_s: int = 3600,
        compute: Callable[[RouteSnapshot], List[ColoredSegment]] = run_pipeline,
        use_redis: bool = True,
    ):
        self.max_entries = max(1, max_entries)
        self.ttl_s = ttl_s
        self._compute = compute
        self._use_redis = use_redis
        self._l1: "OrderedDict[str, Tuple[ColoredSegment, ...]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._l1)

    def clear(self) -> None:
        self._l1.clear()

    def get_or_compute(self, snapshot: RouteSnapshot) -> Tuple[str, List[ColoredSegment]]:
        key = keys.snapshot_key(snapshot)

        hit = self._l1.get(key)
        if hit is not None:
            self._l1.move_to_end(key)
            log.debug("route colors L1 hit %s", key)
            return key, list(hit)

        if self._use_redis:
            raw = cache_get_json(keys.route_colors(key))
            if raw is not None:
                log.debug("route colors L2 hit %s", key)
                segments = _decode(raw)
                self._remember(key, segments)
                return key, list(segments)

        log.debug("route colors miss %s (%d route pts, %d samples)",
                  key, len(snapshot.route), len(snapshot.samples))
        segments = self._compute(snapshot)
        self._remember(key, segments)
        if self._use_redis:
            cache_set_json(keys.route_colors(key), _encode(segments), self.ttl_s)
        return key, list(segments)

    def _remember(self, key: str, segments: List[ColoredSegment]) -> None:
        self._l1[key] = tuple(segments)
        self._l1.move_to_end(key)
        while len(self._l1) > self.max_entries:
            self._l1.popitem(last=False)


_default_cache: Optional[RouteColorCache] = None


def default_cache() -> RouteColorCache:
    global _default_cache
    if _default_cache is None:
        from rough_ride.config import settings

        _default_cache = RouteColorCache(
            max_entries=settings.memo_max_entries,
            ttl_s=settings.ttl_route_colors,
        )
    return _default_cache


def compute_route_colors(
    snapshot: RouteSnapshot, cache: Optional[RouteColorCache] = None
) -> List[ColoredSegment]:
    _, segments = (cache or default_cache()).get_or_compute(snapshot)
    return segments
