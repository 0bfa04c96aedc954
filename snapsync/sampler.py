"""Bracket lookup and interpolation fraction for a snapshot buffer.

Pure functions over an explicitly passed buffer; the sampler never blends
values itself and never extrapolates outside the buffered range.
"""

from dataclasses import dataclass
from typing import Sequence, TypeVar

from snapsync.interpolators import Interpolate
from snapsync.snapshot import Snapshot

T = TypeVar("T")

# Intervals shorter than this are treated as degenerate (t forced to 0)
EPSILON = 1e-9


@dataclass(frozen=True)
class SampleResult:
    """Bracketing pair and blend fraction for a timeline position.

    Attributes:
        from_index: Index of the older snapshot
        to_index: Index of the newer snapshot
        t: Blend fraction in [0, 1]
        overrun: True when the timeline has passed the newest snapshot
    """

    from_index: int
    to_index: int
    t: float
    overrun: bool = False


def inverse_lerp(start: float, end: float, value: float) -> float:
    """Fraction of ``value`` between ``start`` and ``end``, clamped to [0, 1]."""
    span = end - start
    if abs(span) < EPSILON:
        return 0.0
    return min(max((value - start) / span, 0.0), 1.0)


def sample(buffer: Sequence[Snapshot[T]], local_time: float) -> SampleResult:
    """Locate the snapshots bracketing ``local_time``.

    Args:
        buffer: Snapshots ordered by remote time (at least two entries)
        local_time: Current timeline position

    Returns:
        SampleResult; clamps to the oldest entry before the buffer and to
        the newest (with ``overrun=True``) after it
    """
    count = len(buffer)
    if count < 2:
        raise ValueError(f"sample() requires at least 2 snapshots, got {count}")

    if local_time < buffer[0].remote_time:
        return SampleResult(0, 0, 0.0)

    for i in range(count - 1):
        first = buffer[i]
        second = buffer[i + 1]
        if first.remote_time <= local_time <= second.remote_time:
            t = inverse_lerp(first.remote_time, second.remote_time, local_time)
            return SampleResult(i, i + 1, t)

    last = count - 1
    return SampleResult(last, last, 0.0, overrun=True)


def interpolate(value_from: T, value_to: T, t: float, strategy: Interpolate[T]) -> T:
    """Blend two values with the injected per-type strategy."""
    return strategy(value_from, value_to, t)
