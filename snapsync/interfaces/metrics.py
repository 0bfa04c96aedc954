"""Metrics and monitoring interface definitions."""

from abc import ABC, abstractmethod
from typing import Any


class IMetricsCollector(ABC):
    """Collects interpolation engine counters and distributions."""

    @abstractmethod
    def record_accepted(self, delivery_interval: float | None = None) -> None:
        """Record an accepted snapshot.

        Args:
            delivery_interval: Seconds since the previous accepted arrival, if any
        """
        pass

    @abstractmethod
    def record_drift(self, drift: float) -> None:
        """Record a drift estimate.

        Args:
            drift: Smoothed drift in seconds
        """
        pass

    @abstractmethod
    def increment_duplicate(self) -> None:
        """Increment rejected duplicate counter."""
        pass

    @abstractmethod
    def increment_time_travel(self) -> None:
        """Increment remote time regression counter."""
        pass

    @abstractmethod
    def increment_overrun(self) -> None:
        """Increment timeline overrun counter."""
        pass

    @abstractmethod
    def increment_eviction(self) -> None:
        """Increment buffer eviction counter."""
        pass

    @abstractmethod
    def get_snapshot(self) -> dict[str, Any]:
        """Get current metrics snapshot.

        Returns:
            Dictionary with all metrics data
        """
        pass
