"""Drift estimation interface for adaptive timescale control."""

from abc import ABC, abstractmethod


class IDriftEstimator(ABC):
    """Tracks timeline drift and delivery jitter using exponential moving averages."""

    @abstractmethod
    def observe_delivery(self, delivery_interval: float) -> None:
        """Record the local arrival delta between two accepted snapshots.

        Args:
            delivery_interval: Seconds between consecutive arrivals
        """
        pass

    @abstractmethod
    def observe_drift(self, latest_remote_time: float, local_time: float) -> None:
        """Record how far the local timeline trails the newest snapshot.

        Args:
            latest_remote_time: Remote time of the newest buffered snapshot
            local_time: Current local timeline position
        """
        pass

    @abstractmethod
    def drift(self, buffer_time: float) -> float:
        """Get smoothed deviation from the intended buffering delay.

        Args:
            buffer_time: Target playback latency in seconds

        Returns:
            Drift in seconds (positive means too far behind)
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset drift tracking (e.g., after a teleport)."""
        pass
