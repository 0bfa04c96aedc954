"""Drift estimation and timescale control law.

The estimator keeps two independent EMAs, both fed once per accepted
snapshot:

- delivery interval: local arrival deltas between consecutive snapshots;
  its standard deviation is the jitter estimate used by
  :func:`dynamic_adjustment`.
- drift: ``latest_remote_time - local_time``; subtracting the target
  ``buffer_time`` yields how far the timeline deviates from the intended
  delay, which :func:`timescale` turns into a playback speed.
"""

import logging

from snapsync.ema import ExponentialMovingAverage
from snapsync.interfaces.drift import IDriftEstimator

logger = logging.getLogger(__name__)


def timescale(
    drift: float,
    catchup_speed: float,
    slowdown_speed: float,
    negative_threshold: float,
    positive_threshold: float,
) -> float:
    """Map smoothed drift to a playback speed multiplier.

    Args:
        drift: Smoothed drift in seconds
        catchup_speed: Speed-up fraction when too far behind
        slowdown_speed: Slow-down fraction when too close to the newest data
        negative_threshold: Absolute lower edge of the dead zone (seconds)
        positive_threshold: Absolute upper edge of the dead zone (seconds)

    Returns:
        ``1 + catchup_speed``, ``1 - slowdown_speed`` or ``1.0``
    """
    if drift > positive_threshold:
        return 1.0 + catchup_speed
    if drift < negative_threshold:
        return 1.0 - slowdown_speed
    return 1.0


def dynamic_adjustment(
    send_interval: float, jitter_std: float, tolerance: float
) -> float:
    """Compute a jitter-aware buffer time multiplier.

    Args:
        send_interval: Expected seconds between remote sends
        jitter_std: Standard deviation of delivery intervals (seconds)
        tolerance: Extra send intervals of safety margin

    Returns:
        Number of send intervals to buffer
    """
    interval_with_jitter = send_interval + jitter_std
    multiples = interval_with_jitter / send_interval
    return multiples + tolerance


class DriftEstimator(IDriftEstimator):
    """Smooths timeline drift and delivery intervals."""

    def __init__(self, alpha: float = 0.1):
        """Initialize drift estimator.

        Args:
            alpha: EMA smoothing factor shared by both filters
        """
        self.drift_ema = ExponentialMovingAverage(alpha)
        self.delivery_interval_ema = ExponentialMovingAverage(alpha)

    def observe_delivery(self, delivery_interval: float) -> None:
        self.delivery_interval_ema.add(delivery_interval)

    def observe_drift(self, latest_remote_time: float, local_time: float) -> None:
        self.drift_ema.add(latest_remote_time - local_time)

    def drift(self, buffer_time: float) -> float:
        if not self.drift_ema.initialized:
            return 0.0
        return self.drift_ema.value - buffer_time

    @property
    def jitter(self) -> float:
        """Standard deviation of delivery intervals in seconds."""
        return self.delivery_interval_ema.standard_deviation

    @property
    def delivery_interval(self) -> float:
        """Smoothed delivery interval in seconds."""
        return self.delivery_interval_ema.value

    def reset(self) -> None:
        """Reset the drift filter.

        Delivery statistics describe the link rather than the timeline, so
        they survive a teleport.
        """
        self.drift_ema.reset()
        logger.debug("Drift EMA reset")
