"""Local playback timeline."""

import logging

logger = logging.getLogger(__name__)


def timeline_clamp(local_time: float, buffer_time: float, latest_remote_time: float) -> float:
    """Keep the timeline within one buffer time of its target position.

    The target is ``latest_remote_time - buffer_time``; the allowed window is
    ``[latest - 2 * buffer_time, latest]``.

    Args:
        local_time: Current timeline position
        buffer_time: Target playback latency in seconds
        latest_remote_time: Remote time of the newest snapshot

    Returns:
        Clamped timeline position
    """
    target_time = latest_remote_time - buffer_time
    lower_bound = target_time - buffer_time
    upper_bound = target_time + buffer_time
    return min(max(local_time, lower_bound), upper_bound)


class LocalTimeline:
    """Playback cursor trailing the remote clock by a buffer time.

    ``local_time`` only moves forward through :meth:`advance`; every other
    mutation is an explicit reset (:meth:`init`, :meth:`teleport`) or a
    correction applied on snapshot arrival (:meth:`clamp`, :meth:`reseed`).
    """

    def __init__(self) -> None:
        self.local_time = 0.0
        self.local_timescale = 1.0
        self._dilation_timer = 0.0

    def init(self, first_remote_time: float, buffer_time: float) -> None:
        """Seed the timeline from the first snapshot.

        Args:
            first_remote_time: Remote time of the first snapshot
            buffer_time: Target playback latency in seconds
        """
        self.local_time = first_remote_time - buffer_time
        self.set_timescale(1.0)

    def teleport(self, time: float, buffer_time: float) -> None:
        """Hard reset to ``time - buffer_time`` at nominal speed."""
        self.init(time, buffer_time)

    def reseed(self, remote_time: float, buffer_time: float) -> None:
        """Pull the timeline back behind a snapshot it has already passed."""
        logger.debug(
            f"Timeline {self.local_time:.4f} passed remote_time={remote_time:.4f}, reseeding"
        )
        self.init(remote_time, buffer_time)

    def clamp(self, buffer_time: float, latest_remote_time: float) -> None:
        self.local_time = timeline_clamp(self.local_time, buffer_time, latest_remote_time)

    def set_timescale(self, value: float) -> None:
        """Set a persistent timescale, cancelling any timed dilation."""
        self.local_timescale = value
        self._dilation_timer = 0.0

    def dilate(self, amount: float, duration: float) -> None:
        """Apply ``1 + amount`` timescale for ``duration`` seconds of ticks.

        Args:
            amount: Signed dilation fraction (0 restores nominal speed)
            duration: Seconds of real time before speed reverts to 1
        """
        if amount == 0.0:
            self.set_timescale(1.0)
            return
        self.local_timescale = 1.0 + amount
        self._dilation_timer = duration

    def advance(self, delta_time: float) -> float:
        """Advance the timeline by one tick.

        Args:
            delta_time: Real elapsed seconds since the previous tick (>= 0)

        Returns:
            New timeline position
        """
        if delta_time < 0.0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")

        self.local_time += delta_time * self.local_timescale

        if self._dilation_timer > 0.0:
            self._dilation_timer -= delta_time
            if self._dilation_timer <= 0.0:
                self.set_timescale(1.0)

        return self.local_time

    def __repr__(self) -> str:
        return (
            f"LocalTimeline(local_time={self.local_time:.4f}, "
            f"timescale={self.local_timescale:.3f})"
        )
