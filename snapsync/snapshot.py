"""Snapshot data structure for interpolation buffering."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """A single timestamped state sample received from the remote source.

    Attributes:
        remote_time: Sender clock timestamp (seconds)
        local_arrival_time: Receiver clock time at insertion (seconds)
        value: Payload to interpolate
    """

    remote_time: float
    local_arrival_time: float
    value: T

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for diagnostics.

        Returns:
            Dictionary with snapshot timing and the raw value
        """
        return {
            "type": "snapshot",
            "remote_time": self.remote_time,
            "local_arrival_time": self.local_arrival_time,
            "value": self.value,
        }
