"""Buffer interface definitions for snapshot management."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from snapsync.snapshot import Snapshot


class ISnapshotBuffer(ABC):
    """Bounded collection of snapshots ordered by remote time."""

    @abstractmethod
    def insert(self, snapshot: "Snapshot") -> bool:
        """Add snapshot to buffer, evicting the oldest entry when full.

        Args:
            snapshot: Snapshot to insert

        Returns:
            True if inserted, False if its remote time is already buffered
        """
        pass

    @abstractmethod
    def drain(self, count: int) -> int:
        """Remove the oldest ``count`` snapshots.

        Args:
            count: Number of entries to drop from the front

        Returns:
            Number of entries actually removed
        """
        pass

    @abstractmethod
    def oldest(self) -> Optional["Snapshot"]:
        """Return the snapshot with the lowest remote time, or None if empty."""
        pass

    @abstractmethod
    def newest(self) -> Optional["Snapshot"]:
        """Return the snapshot with the highest remote time, or None if empty."""
        pass

    @abstractmethod
    def is_full(self) -> bool:
        """Check if buffer is at its limit (next insert evicts).

        Returns:
            True if full, False otherwise
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Check if buffer holds no snapshots.

        Returns:
            True if empty, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all snapshots from buffer."""
        pass
