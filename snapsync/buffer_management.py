"""Buffer health monitoring for snapshot interpolation."""

import logging

logger = logging.getLogger(__name__)


class BufferHealthMonitor:
    """Classifies how much future data the timeline has buffered.

    Health is measured as ``buffered_ahead = newest_remote_time - local_time``
    relative to the target buffer time.
    """

    # Fractions of buffer_time
    LOW_THRESHOLD = 0.5  # <0.5 buffer times ahead
    EXCESS_THRESHOLD = 2.0  # >2 buffer times ahead

    def get_buffer_health(self, buffered_ahead: float, buffer_time: float) -> str:
        """Get buffer health status.

        Args:
            buffered_ahead: Seconds of snapshots ahead of the timeline
            buffer_time: Target playback latency in seconds

        Returns:
            Health status: "starving", "low", "healthy", or "excess"
        """
        if buffered_ahead <= 0.0:
            return "starving"
        elif buffered_ahead < buffer_time * self.LOW_THRESHOLD:
            return "low"
        elif buffered_ahead > buffer_time * self.EXCESS_THRESHOLD:
            return "excess"
        else:
            return "healthy"

    def get_fill_ratio(self, depth: int, buffer_limit: int) -> float:
        """Get buffer occupancy as a 0.0-1.0 ratio.

        Args:
            depth: Current number of buffered snapshots
            buffer_limit: Maximum buffer capacity

        Returns:
            Occupancy ratio
        """
        return depth / buffer_limit if buffer_limit > 0 else 0.0
