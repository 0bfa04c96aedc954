"""Unit tests for LocalTimeline and timeline clamping."""

import pytest

from snapsync.timeline import LocalTimeline, timeline_clamp


class TestTimelineClamp:
    """Test the symmetric window around the target playback time."""

    def test_within_window_unchanged(self):
        assert timeline_clamp(0.85, 0.1, 1.0) == pytest.approx(0.85)

    def test_clamps_far_behind(self):
        assert timeline_clamp(0.0, 0.1, 1.0) == pytest.approx(0.8)

    def test_clamps_past_latest(self):
        assert timeline_clamp(1.5, 0.1, 1.0) == pytest.approx(1.0)


class TestLocalTimeline:
    """Test timeline seeding, advancing and dilation."""

    def test_init_seeds_behind_first_snapshot(self):
        timeline = LocalTimeline()
        timeline.init(0.0, 0.1)
        assert timeline.local_time == pytest.approx(-0.1)
        assert timeline.local_timescale == 1.0

    def test_advance_applies_timescale(self):
        timeline = LocalTimeline()
        timeline.init(1.0, 0.1)
        timeline.set_timescale(1.5)
        timeline.advance(0.2)
        assert timeline.local_time == pytest.approx(0.9 + 0.3)

    def test_advance_is_monotonic(self):
        timeline = LocalTimeline()
        timeline.init(0.0, 0.1)
        previous = timeline.local_time
        for dt in [0.0, 0.016, 0.0, 0.033, 0.5, 0.001]:
            timeline.advance(dt)
            assert timeline.local_time >= previous
            previous = timeline.local_time

    def test_negative_delta_rejected(self):
        timeline = LocalTimeline()
        with pytest.raises(ValueError):
            timeline.advance(-0.01)

    def test_teleport_resets_timescale(self):
        timeline = LocalTimeline()
        timeline.set_timescale(1.02)
        timeline.teleport(5.0, 0.1)
        assert timeline.local_time == pytest.approx(4.9)
        assert timeline.local_timescale == 1.0

    def test_dilation_expires(self):
        """Timed dilation reverts to nominal speed after its duration."""
        timeline = LocalTimeline()
        timeline.init(0.0, 0.1)
        timeline.dilate(0.02, duration=0.1)
        assert timeline.local_timescale == pytest.approx(1.02)

        timeline.advance(0.05)
        assert timeline.local_timescale == pytest.approx(1.02)
        timeline.advance(0.05)
        assert timeline.local_timescale == 1.0

    def test_zero_dilation_is_nominal(self):
        timeline = LocalTimeline()
        timeline.dilate(-0.04, duration=1.0)
        timeline.dilate(0.0, duration=1.0)
        assert timeline.local_timescale == 1.0
