"""Background recomputation of route colors.

The caller submits immutable snapshots whenever the route, the samples or the
view change. Only the newest snapshot matters: a pending one is replaced, and
a result computed from a snapshot that has since been superseded is thrown
away instead of published.

Run a demo loop with:  python -m rough_ride.worker
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from rough_ride.contracts.segment_contract import ColoredSegment
from rough_ride.core.engine import RouteColorCache, RouteSnapshot, default_cache

log = logging.getLogger(__name__)

ResultCallback = Callable[[str, List[ColoredSegment]], None]


class RecomputeWorker:
    """Single background thread, last write wins."""

    def __init__(
        self,
        cache: Optional[RouteColorCache] = None,
        on_result: Optional[ResultCallback] = None,
    ):
        self._cache = cache or default_cache()
        self._on_result = on_result
        self._cond = threading.Condition()
        self._pending: Optional[RouteSnapshot] = None
        self._generation = 0
        self._published: Optional[Tuple[str, List[ColoredSegment]]] = None
        self._busy = False
        self._stopping = False
        self._thread = threading.Thread(target=self._run, name="rough-ride-recompute", daemon=True)
        self.discarded = 0

    def start(self) -> "RecomputeWorker":
        self._thread.start()
        return self

    def submit(self, snapshot: RouteSnapshot) -> None:
        with self._cond:
            if self._pending is not None:
                log.debug("Replacing pending snapshot")
            self._pending = snapshot
            self._generation += 1
            self._cond.notify()

    def latest(self) -> Optional[Tuple[str, List[ColoredSegment]]]:
        """Most recently published ``(snapshot_key, segments)``."""
        with self._cond:
            return self._published

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until nothing is pending or computing, or the worker is stopped."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while (self._pending is not None or self._busy) and not self._stopping:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._cond.wait(remaining)
            return True

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._pending is None and not self._stopping:
                    self._cond.wait()
                if self._stopping:
                    return
                snapshot, self._pending = self._pending, None
                generation = self._generation
                self._busy = True

            try:
                key, segments = self._cache.get_or_compute(snapshot)
            except Exception as exc:
                log.exception("Recompute failed: %s", exc)
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()
                continue

            with self._cond:
                self._busy = False
                if generation != self._generation:
                    self.discarded += 1
                    log.debug("Discarding stale result %s", key)
                    self._cond.notify_all()
                    continue
                self._published = (key, segments)
                self._cond.notify_all()

            if self._on_result is not None:
                try:
                    self._on_result(key, segments)
                except Exception as exc:
                    log.exception("on_result callback failed: %s", exc)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [worker] %(levelname)s %(message)s",
    )
    from rough_ride.config import settings
    from rough_ride.core.models import RoughnessSample, ViewContext

    log.info("Worker starting (memo=%d entries)", settings.memo_max_entries)

    def _report(key: str, segments: List[ColoredSegment]) -> None:
        log.info("Published %s: %d segments", key[:12], len(segments))

    worker = RecomputeWorker(on_result=_report).start()

    # Simulated pan: the camera drifts away from a short straight route
    route = ((45.0, 9.0), (45.01, 9.0))
    samples = tuple(
        RoughnessSample(lat=45.0 + i * 0.0005, lon=9.0, raw_roughness=(i % 10))
        for i in range(20)
    )
    try:
        for step in range(10):
            view = ViewContext(zoom_level=15 - step * 0.5, camera_lat=45.0 + step * 0.01, camera_lon=9.0)
            worker.submit(RouteSnapshot(
                route=route, samples=samples, view=view, config=settings.roughness_config(),
            ))
            time.sleep(0.05)
        worker.wait_idle(timeout=10)
        log.info("Done (%d stale results discarded)", worker.discarded)
    finally:
        worker.stop()


if __name__ == "__main__":
    main()
