"""Internal interfaces for SnapSync components.

Abstract Base Classes (ABCs) defining contracts for snapshot buffering,
drift estimation and metrics collection.
"""

from snapsync.interfaces.buffer import ISnapshotBuffer
from snapsync.interfaces.drift import IDriftEstimator
from snapsync.interfaces.metrics import IMetricsCollector

__all__ = [
    # Buffer interfaces
    "ISnapshotBuffer",
    # Timing interfaces
    "IDriftEstimator",
    # Metrics interfaces
    "IMetricsCollector",
]
