"""SnapSync - snapshot interpolation and clock synchronization engine.

This package turns timestamped state snapshots from an authoritative remote
source into a smooth local playback value, absorbing jitter, reordering and
packet loss with a buffered timeline and adaptive timescale.
"""

from snapsync.buffer_management import BufferHealthMonitor
from snapsync.config import SnapSyncConfig, get_config
from snapsync.drift_estimator import DriftEstimator, dynamic_adjustment, timescale
from snapsync.ema import ExponentialMovingAverage
from snapsync.engine import SnapshotInterpolator
from snapsync.interpolators import (
    Interpolate,
    TransformData,
    lerp_scalar,
    lerp_transform,
    lerp_vector,
    slerp_quaternion,
)
from snapsync.metrics import InterpolationMetrics
from snapsync.sampler import SampleResult, interpolate, sample
from snapsync.snapshot import Snapshot
from snapsync.snapshot_buffer import SnapshotBuffer
from snapsync.timeline import LocalTimeline, timeline_clamp

__version__ = "1.0.0"

__all__ = [
    # Core components
    "SnapshotInterpolator",
    "SnapshotBuffer",
    "DriftEstimator",
    "LocalTimeline",
    # Data structures
    "Snapshot",
    "SampleResult",
    "TransformData",
    "ExponentialMovingAverage",
    # Pure functions
    "sample",
    "interpolate",
    "timescale",
    "dynamic_adjustment",
    "timeline_clamp",
    # Interpolation strategies
    "Interpolate",
    "lerp_scalar",
    "lerp_vector",
    "slerp_quaternion",
    "lerp_transform",
    # Configuration
    "SnapSyncConfig",
    "get_config",
    # Metrics
    "InterpolationMetrics",
    "BufferHealthMonitor",
]
