import pytest

from rough_ride.core.models import MotionSample, RoughnessConfig
from rough_ride.core.motion import MotionRoughnessScorer


def _stream(z, start_ms=0, end_ms=600, step_ms=10):
    return [MotionSample(x=0.0, y=0.0, z=z, t_ms=t) for t in range(start_ms, end_ms + 1, step_ms)]


def _recording_scorer(**kw):
    scorer = MotionRoughnessScorer(RoughnessConfig(), **kw)
    scorer.set_recording(True, now_ms=0)
    return scorer


def test_gravity_only_stream_scores_zero():
    scorer = _recording_scorer()
    flushed = [s for s in map(scorer.ingest, _stream(9.8)) if s is not None]
    assert len(flushed) == 1
    assert scorer.score == pytest.approx(0.0, abs=1e-9)


def test_large_deviation_is_capped_at_ten():
    scorer = _recording_scorer()
    for s in _stream(20.0):
        scorer.ingest(s)
    assert scorer.score == 10.0


def test_mid_deviation_maps_linearly():
    scorer = _recording_scorer()
    for s in _stream(12.3):  # deviation 2.5 -> 5.0
        scorer.ingest(s)
    assert scorer.score == pytest.approx(5.0)


def test_orientation_independent_magnitude():
    scorer = _recording_scorer()
    # |(6, 0, 8)| = 10 -> deviation 0.2 -> 0.4
    for t in range(0, 601, 10):
        scorer.ingest(MotionSample(x=6.0, y=0.0, z=8.0, t_ms=t))
    assert scorer.score == pytest.approx(0.4)


def test_score_holds_until_window_closes():
    scorer = _recording_scorer()
    assert scorer.ingest(MotionSample(z=20.0, t_ms=100)) is None
    assert scorer.ingest(MotionSample(z=20.0, t_ms=500)) is None
    assert scorer.score == 0.0
    assert scorer.ingest(MotionSample(z=20.0, t_ms=501)) == 10.0


def test_windows_do_not_overlap():
    scorer = _recording_scorer()
    for s in _stream(20.0, 0, 510):
        scorer.ingest(s)
    assert scorer.score == 10.0
    # Next window only sees gravity-level readings
    for s in _stream(9.8, 520, 1020):
        scorer.ingest(s)
    assert scorer.score == pytest.approx(0.0, abs=1e-9)


def test_inactive_scorer_ignores_samples():
    scorer = MotionRoughnessScorer()
    for s in _stream(20.0):
        assert scorer.ingest(s) is None
    assert scorer.score == 0.0


def test_stopping_resets_score_immediately():
    scorer = _recording_scorer()
    for s in _stream(20.0):
        scorer.ingest(s)
    assert scorer.score == 10.0
    scorer.set_recording(False)
    assert scorer.score == 0.0
    assert not scorer.recording


def test_first_sample_opens_window_without_start_time():
    scorer = MotionRoughnessScorer()
    scorer.set_recording(True)
    assert scorer.ingest(MotionSample(z=20.0, t_ms=10_000)) is None
    assert scorer.ingest(MotionSample(z=20.0, t_ms=10_400)) is None
    assert scorer.ingest(MotionSample(z=20.0, t_ms=10_600)) == 10.0


def test_offer_and_drain_in_order():
    scorer = _recording_scorer()
    for s in _stream(20.0, 0, 1200, 100):
        scorer.offer(s)
    # flushes at 600 and 1200
    assert scorer.drain() == [10.0, 10.0]
    assert scorer.drain() == []


def test_bounded_queue_drops_oldest():
    scorer = _recording_scorer(queue_size=3)
    readings = [
        MotionSample(z=20.0, t_ms=100),
        MotionSample(z=20.0, t_ms=200),
        MotionSample(z=9.8, t_ms=300),
        MotionSample(z=9.8, t_ms=400),
        MotionSample(z=9.8, t_ms=600),
    ]
    for s in readings:
        scorer.offer(s)
    assert scorer.drain() == [pytest.approx(0.0, abs=1e-9)]
