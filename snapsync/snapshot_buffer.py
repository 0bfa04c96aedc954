"""Bounded snapshot buffer ordered by remote time.

Keeps a parallel list of remote timestamps so inserts can binary-search
their position. Not thread-safe: the engine drains the transport hand-off
queue into it from a single consumer context.
"""

import bisect
import logging
from typing import Generic, Iterator, Optional, TypeVar

from snapsync.interfaces.buffer import ISnapshotBuffer
from snapsync.snapshot import Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SnapshotBuffer(ISnapshotBuffer, Generic[T]):
    """Sorted, capacity-bounded collection of snapshots keyed by remote time."""

    def __init__(self, buffer_limit: int = 32):
        """Initialize snapshot buffer.

        Args:
            buffer_limit: Maximum number of snapshots to hold (must be >= 2)
        """
        if buffer_limit < 2:
            raise ValueError(f"Buffer limit must be >= 2, got {buffer_limit}")

        self.buffer_limit = buffer_limit
        self._times: list[float] = []
        self._snapshots: list[Snapshot[T]] = []
        self.evictions = 0

    def insert(self, snapshot: Snapshot[T]) -> bool:
        """Add snapshot to buffer in remote time order.

        Duplicates are rejected before eviction, so a rejected insert never
        mutates the buffer.

        Args:
            snapshot: Snapshot to insert

        Returns:
            True if inserted, False if its remote time is already buffered
        """
        if self.contains(snapshot.remote_time):
            logger.debug(f"Rejected duplicate snapshot at remote_time={snapshot.remote_time}")
            return False

        if len(self._snapshots) >= self.buffer_limit:
            evicted = self._snapshots.pop(0)
            self._times.pop(0)
            self.evictions += 1
            logger.debug(
                f"Buffer full ({self.buffer_limit}), evicted remote_time={evicted.remote_time}"
            )

        index = bisect.bisect_left(self._times, snapshot.remote_time)
        self._times.insert(index, snapshot.remote_time)
        self._snapshots.insert(index, snapshot)
        return True

    def contains(self, remote_time: float) -> bool:
        """Check whether a snapshot with this exact remote time is buffered."""
        index = bisect.bisect_left(self._times, remote_time)
        return index < len(self._times) and self._times[index] == remote_time

    def drain(self, count: int) -> int:
        """Remove the oldest ``count`` snapshots.

        Args:
            count: Number of entries to drop from the front

        Returns:
            Number of entries actually removed
        """
        count = max(0, min(count, len(self._snapshots)))
        if count:
            del self._snapshots[:count]
            del self._times[:count]
        return count

    def oldest(self) -> Optional[Snapshot[T]]:
        return self._snapshots[0] if self._snapshots else None

    def newest(self) -> Optional[Snapshot[T]]:
        return self._snapshots[-1] if self._snapshots else None

    def is_full(self) -> bool:
        return len(self._snapshots) >= self.buffer_limit

    def is_empty(self) -> bool:
        return not self._snapshots

    def clear(self) -> None:
        """Remove all snapshots from buffer."""
        old_count = len(self._snapshots)
        self._snapshots.clear()
        self._times.clear()
        logger.debug(f"Buffer cleared ({old_count} snapshots removed)")

    def __len__(self) -> int:
        return len(self._snapshots)

    def __getitem__(self, index: int) -> Snapshot[T]:
        return self._snapshots[index]

    def __iter__(self) -> Iterator[Snapshot[T]]:
        return iter(self._snapshots)

    def __repr__(self) -> str:
        """String representation for debugging."""
        span = (
            f"{self._times[0]:.3f}..{self._times[-1]:.3f}" if self._times else "empty"
        )
        return (
            f"SnapshotBuffer(limit={self.buffer_limit}, depth={len(self._snapshots)}, "
            f"span={span})"
        )
