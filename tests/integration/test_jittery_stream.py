"""Integration test for playback over a jittery, lossy snapshot stream.

Validates, for both timescale policies:
- Buffer depth never exceeds the configured limit
- Sampled values never leave the range of the bracketing snapshots
- Timescale stays within [1 - slowdown_speed, 1 + catchup_speed]
- The timeline only moves backward on inserts or overrun teleports
"""

import pytest

from snapsync.config import SnapSyncConfig
from snapsync.engine import SnapshotInterpolator
from snapsync.interpolators import lerp_scalar

SEND_INTERVAL = 0.05  # 20 Hz server
FRAME_DT = 1.0 / 60.0  # 60 Hz client
LATENCY = 0.05
JITTER_PATTERN = [0.0, 0.02, 0.01, 0.03, 0.005, 0.025, 0.015]
DROPPED = {7, 19, 20, 53, 88}


def build_arrivals(count: int):
    """(arrival_time, remote_time) pairs ordered by arrival."""
    arrivals = []
    for i in range(count):
        if i in DROPPED:
            continue
        remote_time = i * SEND_INTERVAL
        arrival = remote_time + LATENCY + JITTER_PATTERN[i % len(JITTER_PATTERN)]
        arrivals.append((arrival, remote_time))
    arrivals.sort()
    return arrivals


@pytest.mark.parametrize("mode", ["adaptive", "simple"])
def test_stream_invariants(mode):
    config = SnapSyncConfig(
        _env_file=None,
        mode=mode,
        buffer_time=0.1,
        buffer_limit=8,
        send_interval=SEND_INTERVAL,
        catchup_speed=0.05,
        slowdown_speed=0.05,
        ema_smoothing=0.2,
    )
    engine = SnapshotInterpolator(lerp_scalar, config=config, default=0.0)
    arrivals = build_arrivals(200)

    cursor = 0
    now = 0.0
    samples = 0

    while now < 10.0:
        while cursor < len(arrivals) and arrivals[cursor][0] <= now:
            arrival, remote_time = arrivals[cursor]
            # Ramp signal: the value equals its remote timestamp
            engine.insert(remote_time, remote_time, local_arrival_time=arrival)
            cursor += 1
            assert len(engine.buffer) <= config.buffer_limit

        before = engine.local_time
        engine.advance(FRAME_DT)
        assert engine.local_time >= before

        if len(engine.buffer) >= 2:
            lowest = engine.buffer.oldest().value
            highest = engine.buffer.newest().value
            overruns_before = engine.metrics.overrun_teleports
            value = engine.sample()
            samples += 1

            assert lowest - 1e-9 <= value <= highest + 1e-9, (
                f"Sampled {value} outside buffered range [{lowest}, {highest}]"
            )
            if engine.metrics.overrun_teleports == overruns_before and value > lowest:
                # Inside a bracket a linear ramp reproduces the timeline position
                assert value == pytest.approx(engine.local_time, abs=1e-9)
        else:
            engine.sample()

        assert 0.95 - 1e-12 <= engine.local_timescale <= 1.05 + 1e-12
        now += FRAME_DT

    snapshot = engine.metrics.get_snapshot()
    assert samples > 0
    assert snapshot["accepted"] == cursor
    assert snapshot["duplicates"] == 0
    assert snapshot["time_travel_resets"] == 0, "Jitter below the send interval never reorders"
    assert engine.jitter > 0.0
