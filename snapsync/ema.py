"""Exponential moving average with running variance."""

import math


class ExponentialMovingAverage:
    """Recursive smoothing filter weighting recent samples more heavily.

    The first sample seeds the average directly, avoiding a startup bias
    toward zero. Variance follows the exponentially weighted form
    ``var = (1 - alpha) * (var + alpha * delta**2)``.
    """

    def __init__(self, alpha: float = 0.1):
        """Initialize EMA.

        Args:
            alpha: Smoothing factor in (0, 1]; higher reacts faster
        """
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"EMA alpha must be in (0, 1], got {alpha}")

        self.alpha = alpha
        self.value = 0.0
        self.variance = 0.0
        self.count = 0

    @classmethod
    def from_window(cls, n: int) -> "ExponentialMovingAverage":
        """Create an EMA whose smoothing matches an ``n``-sample window.

        Args:
            n: Equivalent window length (>= 1)

        Returns:
            EMA with alpha = 2 / (n + 1)
        """
        if n < 1:
            raise ValueError(f"EMA window must be >= 1, got {n}")
        return cls(alpha=2.0 / (n + 1))

    @property
    def initialized(self) -> bool:
        return self.count > 0

    @property
    def standard_deviation(self) -> float:
        return math.sqrt(self.variance)

    def add(self, sample: float) -> float:
        """Feed a new sample.

        Args:
            sample: Observed value

        Returns:
            Updated average
        """
        if self.count == 0:
            self.value = sample
        else:
            delta = sample - self.value
            self.value += self.alpha * delta
            self.variance = (1.0 - self.alpha) * (self.variance + self.alpha * delta * delta)
        self.count += 1
        return self.value

    def reset(self) -> None:
        """Forget all samples."""
        self.value = 0.0
        self.variance = 0.0
        self.count = 0

    def __repr__(self) -> str:
        return (
            f"ExponentialMovingAverage(alpha={self.alpha}, value={self.value:.6f}, "
            f"std={self.standard_deviation:.6f}, count={self.count})"
        )
