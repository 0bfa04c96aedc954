"""Snapshot interpolation engine.

Converts an irregular, possibly reordered or lossy stream of
``(remote_time, value)`` pairs into a smooth playback value. Per tick the
host calls :meth:`SnapshotInterpolator.advance` then
:meth:`SnapshotInterpolator.sample`; the transport calls
:meth:`SnapshotInterpolator.insert` whenever an update is decoded.

The engine does no locking. Snapshots arriving on a network thread must be
handed to the tick thread (e.g. through a queue drained once per tick)
before :meth:`insert` is called.

Two timescale policies are available through ``SnapSyncConfig.mode``:

- ``adaptive``: the timeline is clamped to the newest snapshot on every
  arrival and an EMA of the trailing delay drives catch-up/slow-down.
- ``simple``: no drift smoothing; each arrival compares the raw timeline
  against a dead zone around ``remote_time - buffer_time`` and applies a
  short-lived dilation, reseeding if the timeline already passed the
  snapshot.

Both policies teleport to the newest snapshot when playback overruns it.
"""

import logging
import time
from typing import Callable, Generic, Optional, TypeVar

from snapsync.buffer_management import BufferHealthMonitor
from snapsync.config import SnapSyncConfig, get_config
from snapsync.drift_estimator import DriftEstimator, dynamic_adjustment, timescale
from snapsync.exceptions import ConfigurationError
from snapsync.interpolators import Interpolate
from snapsync.metrics import InterpolationMetrics
from snapsync.sampler import interpolate, sample as sample_bracket
from snapsync.snapshot import Snapshot
from snapsync.snapshot_buffer import SnapshotBuffer
from snapsync.timeline import LocalTimeline

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Simple mode dead zone, as a fraction of buffer_time around the target
SIMPLE_DEADZONE = 0.5
# Simple mode dilation lasts this many send intervals
SIMPLE_DILATION_INTERVALS = 2


class SnapshotInterpolator(Generic[T]):
    """Client-side interpolation buffer with adaptive timescale."""

    def __init__(
        self,
        interpolate_fn: Interpolate[T],
        config: Optional[SnapSyncConfig] = None,
        default: Optional[T] = None,
        clock: Callable[[], float] = time.monotonic,
        metrics: Optional[InterpolationMetrics] = None,
    ):
        """Initialize interpolator.

        Args:
            interpolate_fn: Pure blend function for the value type
            config: Engine configuration (defaults to the global config)
            default: Value returned by sample() before any snapshot arrives
            clock: Local clock used to stamp arrivals
            metrics: Metrics collector (a fresh one is created if omitted)
        """
        self._interpolate = interpolate_fn
        self.default = default
        self._clock = clock
        self.metrics = metrics or InterpolationMetrics()
        self.health_monitor = BufferHealthMonitor()

        self.configure(config if config is not None else get_config())

    def configure(self, config: SnapSyncConfig) -> None:
        """Apply a configuration and reset all buffered state.

        Args:
            config: Validated engine configuration
        """
        if not isinstance(config, SnapSyncConfig):
            raise ConfigurationError(
                f"Expected SnapSyncConfig, got {type(config).__name__}"
            )

        self._config = config
        self._buffer_time = config.buffer_time
        self.buffer: SnapshotBuffer[T] = SnapshotBuffer(config.buffer_limit)
        self.timeline = LocalTimeline()
        self.drift_estimator = DriftEstimator(alpha=config.ema_smoothing)
        self._last_arrival: Optional[float] = None

        logger.info(
            f"SnapshotInterpolator configured: mode={config.mode}, "
            f"buffer_time={config.buffer_time}s, buffer_limit={config.buffer_limit}"
        )

    @property
    def config(self) -> SnapSyncConfig:
        return self._config

    @property
    def buffer_time(self) -> float:
        """Current target playback latency in seconds."""
        return self._buffer_time

    @property
    def local_time(self) -> float:
        return self.timeline.local_time

    @property
    def local_timescale(self) -> float:
        return self.timeline.local_timescale

    @property
    def drift(self) -> float:
        return self.drift_estimator.drift(self._buffer_time)

    @property
    def jitter(self) -> float:
        return self.drift_estimator.jitter

    @property
    def buffered_ahead(self) -> float:
        """Seconds of snapshots ahead of the timeline (0 when empty)."""
        newest = self.buffer.newest()
        if newest is None:
            return 0.0
        return newest.remote_time - self.timeline.local_time

    def health(self) -> str:
        """Buffer health status, see BufferHealthMonitor."""
        return self.health_monitor.get_buffer_health(self.buffered_ahead, self._buffer_time)

    def insert(
        self, remote_time: float, value: T, local_arrival_time: Optional[float] = None
    ) -> bool:
        """Buffer a snapshot decoded from the network.

        Args:
            remote_time: Sender timestamp in seconds
            value: State payload
            local_arrival_time: Receiver timestamp; read from the clock if omitted

        Returns:
            True if accepted, False if a snapshot with the same remote time
            is already buffered
        """
        if self.buffer.contains(remote_time):
            self.metrics.increment_duplicate()
            logger.debug(
                "Duplicate snapshot discarded", extra={"remote_time": remote_time}
            )
            return False

        arrival = self._clock() if local_arrival_time is None else local_arrival_time
        snapshot = Snapshot(remote_time=remote_time, local_arrival_time=arrival, value=value)
        self._record_arrival(arrival)

        if self._config.dynamic_adjustment:
            self._update_buffer_time()

        newest = self.buffer.newest()
        if newest is not None and remote_time < newest.remote_time:
            logger.info(
                f"Remote time regressed from {newest.remote_time} to {remote_time}, resetting",
                extra={"remote_time": remote_time, "local_time": self.timeline.local_time},
            )
            self.metrics.increment_time_travel()
            self._reset_to(snapshot)
            return True

        first = newest is None
        if first:
            self.timeline.init(remote_time, self._buffer_time)

        evictions_before = self.buffer.evictions
        self.buffer.insert(snapshot)
        if self.buffer.evictions > evictions_before:
            self.metrics.increment_eviction()

        if self._config.mode == "adaptive":
            self._adjust_adaptive(remote_time)
        elif not first:
            self._adjust_simple(remote_time)

        return True

    def advance(self, delta_time: float) -> None:
        """Advance the local timeline by one tick.

        Args:
            delta_time: Real elapsed seconds since the previous tick (>= 0)
        """
        if delta_time < 0.0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")
        if self.buffer.is_empty():
            return
        self.timeline.advance(delta_time)

    def sample(self) -> Optional[T]:
        """Blend the buffered snapshots at the current timeline position.

        Returns:
            Interpolated value, the single buffered value, or ``default``
            when nothing has arrived yet
        """
        if self.buffer.is_empty():
            return self.default
        if len(self.buffer) == 1:
            return self.buffer[0].value

        result = sample_bracket(self.buffer, self.timeline.local_time)

        if result.overrun:
            latest = self.buffer[result.to_index]
            self.metrics.increment_overrun()
            logger.debug(
                "Timeline passed newest snapshot, teleporting",
                extra={"remote_time": latest.remote_time, "local_time": self.timeline.local_time},
            )
            self._reset_to(latest)
            return latest.value

        value_from = self.buffer[result.from_index].value
        value_to = self.buffer[result.to_index].value
        value = interpolate(value_from, value_to, result.t, self._interpolate)

        # Timeline never revisits snapshots before the bracket
        self.buffer.drain(result.from_index)
        return value

    def teleport(self, remote_time: float, value: T) -> None:
        """Hard reset to a single known value.

        Args:
            remote_time: Remote time of the value
            value: State to snap to
        """
        snapshot = Snapshot(remote_time=remote_time, local_arrival_time=self._clock(), value=value)
        self._reset_to(snapshot)

    def _reset_to(self, snapshot: Snapshot[T]) -> None:
        self.buffer.clear()
        self.buffer.insert(snapshot)
        self.timeline.teleport(snapshot.remote_time, self._buffer_time)
        self.drift_estimator.reset()

    def _record_arrival(self, arrival: float) -> None:
        delivery_interval = None
        if self._last_arrival is not None:
            delivery_interval = arrival - self._last_arrival
            self.drift_estimator.observe_delivery(delivery_interval)
        self._last_arrival = arrival
        self.metrics.record_accepted(delivery_interval)

    def _update_buffer_time(self) -> None:
        config = self._config
        multiplier = dynamic_adjustment(
            config.send_interval,
            self.drift_estimator.jitter,
            config.dynamic_adjustment_tolerance,
        )
        self._buffer_time = config.send_interval * multiplier

    def _adjust_adaptive(self, latest_remote_time: float) -> None:
        config = self._config
        self.timeline.clamp(self._buffer_time, latest_remote_time)
        self.drift_estimator.observe_drift(latest_remote_time, self.timeline.local_time)

        drift = self.drift_estimator.drift(self._buffer_time)
        self.metrics.record_drift(drift)
        self.timeline.set_timescale(
            timescale(
                drift,
                config.catchup_speed,
                config.slowdown_speed,
                config.absolute_negative_threshold,
                config.absolute_positive_threshold,
            )
        )
        logger.debug(
            "Timescale updated",
            extra={
                "remote_time": latest_remote_time,
                "local_time": self.timeline.local_time,
                "drift": drift,
                "timescale": self.timeline.local_timescale,
            },
        )

    def _adjust_simple(self, remote_time: float) -> None:
        config = self._config
        local_time = self.timeline.local_time
        self.metrics.record_drift(remote_time - local_time - self._buffer_time)

        if local_time >= remote_time:
            self.timeline.reseed(remote_time, self._buffer_time)
            return

        earliest = remote_time - self._buffer_time * (1.0 + SIMPLE_DEADZONE)
        latest = remote_time - self._buffer_time * (1.0 - SIMPLE_DEADZONE)
        duration = config.send_interval * SIMPLE_DILATION_INTERVALS

        if local_time < earliest:
            self.timeline.dilate(config.catchup_speed, duration)
        elif local_time > latest:
            self.timeline.dilate(-config.slowdown_speed, duration)
        else:
            self.timeline.dilate(0.0, duration)

    def __repr__(self) -> str:
        return (
            f"SnapshotInterpolator(mode={self._config.mode}, depth={len(self.buffer)}, "
            f"local_time={self.timeline.local_time:.4f}, "
            f"timescale={self.timeline.local_timescale:.3f})"
        )
