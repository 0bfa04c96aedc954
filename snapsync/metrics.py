"""Interpolation metrics collection and aggregation.

Tracks accepted/rejected snapshots, timeline resets, drift and delivery
intervals for monitoring and tuning buffer settings.
"""

import logging
import time
from collections import deque
from datetime import datetime
from typing import Any

import numpy as np

from snapsync.interfaces.metrics import IMetricsCollector

logger = logging.getLogger(__name__)


class SampleHistogram:
    """Tracks float measurements with percentile calculations."""

    def __init__(self, max_samples: int = 10000):
        """Initialize histogram.

        Args:
            max_samples: Maximum samples to retain (circular buffer)
        """
        self.samples: deque[float] = deque(maxlen=max_samples)
        self.max_samples = max_samples

    def record(self, value: float) -> None:
        self.samples.append(value)

    def get_stats(self) -> dict[str, float | int]:
        """Get distribution statistics.

        Returns:
            Dictionary with avg, std, p50, p95, p99, samples count
        """
        if not self.samples:
            return {"avg": 0.0, "std": 0.0, "p50": 0.0, "p95": 0.0, "p99": 0.0, "samples": 0}

        arr = np.array(list(self.samples))
        return {
            "avg": float(np.mean(arr)),
            "std": float(np.std(arr)),
            "p50": float(np.percentile(arr, 50)),
            "p95": float(np.percentile(arr, 95)),
            "p99": float(np.percentile(arr, 99)),
            "samples": len(self.samples),
        }


class InterpolationMetrics(IMetricsCollector):
    """Collects and aggregates interpolation engine metrics."""

    def __init__(self) -> None:
        self.drift = SampleHistogram()
        self.delivery_interval = SampleHistogram()

        # Event counters
        self.accepted = 0
        self.duplicates = 0
        self.time_travel_resets = 0
        self.overrun_teleports = 0
        self.evictions = 0

        self.start_time = time.time()

    def record_accepted(self, delivery_interval: float | None = None) -> None:
        self.accepted += 1
        if delivery_interval is not None:
            self.delivery_interval.record(delivery_interval)

    def record_drift(self, drift: float) -> None:
        self.drift.record(drift)

    def increment_duplicate(self) -> None:
        self.duplicates += 1

    def increment_time_travel(self) -> None:
        """Increment remote time regression counter."""
        self.time_travel_resets += 1
        logger.info(f"Remote time regression, timeline reset (total: {self.time_travel_resets})")

    def increment_overrun(self) -> None:
        """Increment timeline overrun counter."""
        self.overrun_teleports += 1
        logger.warning(
            f"Timeline overran newest snapshot, re-buffering (total: {self.overrun_teleports})"
        )

    def increment_eviction(self) -> None:
        self.evictions += 1

    def get_snapshot(self) -> dict[str, Any]:
        """Get current metrics snapshot.

        Returns:
            Dictionary with all metrics data
        """
        return {
            "accepted": self.accepted,
            "duplicates": self.duplicates,
            "time_travel_resets": self.time_travel_resets,
            "overrun_teleports": self.overrun_teleports,
            "evictions": self.evictions,
            "drift_sec": self.drift.get_stats(),
            "delivery_interval_sec": self.delivery_interval.get_stats(),
            "uptime_sec": time.time() - self.start_time,
            "timestamp": datetime.now().isoformat(),
        }
