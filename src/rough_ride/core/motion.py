"""Accelerometer stream -> stepwise roughness score (0..10)."""
from __future__ import annotations

import logging
from collections import deque
from math import sqrt
from typing import Deque, List, Optional

from rough_ride.core.models import MotionSample, RoughnessConfig

log = logging.getLogger(__name__)


class MotionRoughnessScorer:
    """
    Averages |‖a‖ - g| over a window and maps it onto 0..10.

    A window closes on the first sample arriving more than
    ``score_window_ms`` after the previous flush; the score then holds until
    the next flush. Nothing is processed while recording is off.

    Samples can be pushed straight through ``ingest`` from a sensor callback,
    or queued with ``offer`` and processed in order by ``drain`` on a timer.
    """

    def __init__(self, config: Optional[RoughnessConfig] = None, queue_size: int = 4096):
        self.config = config or RoughnessConfig()
        self._queue: Deque[MotionSample] = deque(maxlen=queue_size)
        self._window: List[float] = []
        self._last_flush_ms: Optional[float] = None
        self._recording = False
        self._score = 0.0

    @property
    def score(self) -> float:
        return self._score

    @property
    def recording(self) -> bool:
        return self._recording

    def set_recording(self, active: bool, now_ms: Optional[float] = None) -> None:
        """Start or stop recording. Stopping zeroes the score immediately."""
        if active == self._recording:
            return
        self._recording = active
        self._window = []
        self._queue.clear()
        if active:
            # Without a start time the first sample opens the window
            self._last_flush_ms = now_ms
        else:
            self._last_flush_ms = None
            self._score = 0.0
        log.debug("Motion recording %s", "started" if active else "stopped")

    def ingest(self, sample: MotionSample) -> Optional[float]:
        """Process one reading. Returns the new score when a window closed."""
        if not self._recording:
            return None

        if self._last_flush_ms is None:
            self._last_flush_ms = sample.t_ms

        magnitude = sqrt(sample.x * sample.x + sample.y * sample.y + sample.z * sample.z)
        self._window.append(abs(magnitude - self.config.gravity))

        if sample.t_ms - self._last_flush_ms > self.config.score_window_ms:
            return self._flush(sample.t_ms)
        return None

    def offer(self, sample: MotionSample) -> None:
        """Queue a reading for the next ``drain``; the oldest drop when full."""
        if self._recording:
            self._queue.append(sample)

    def drain(self) -> List[float]:
        """Process queued readings in arrival order; returns flushed scores."""
        scores: List[float] = []
        while self._queue:
            s = self.ingest(self._queue.popleft())
            if s is not None:
                scores.append(s)
        return scores

    def _flush(self, now_ms: float) -> float:
        avg = sum(self._window) / len(self._window)
        self._score = min(10.0, (avg / self.config.deviation_cap) * 10.0)
        self._window = []
        self._last_flush_ms = now_ms
        return self._score
