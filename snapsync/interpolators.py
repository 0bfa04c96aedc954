"""Per-type interpolation strategies.

A strategy is any pure callable ``(from, to, t) -> value``. The engine is
bound to one strategy at construction, so each value type resolves its
blend once instead of dispatching per frame.
"""

from dataclasses import dataclass
from typing import Protocol, TypeVar

import numpy as np

T = TypeVar("T")

# Above this |dot| two quaternions are treated as parallel (nlerp fallback)
SLERP_DOT_THRESHOLD = 0.9995


class Interpolate(Protocol[T]):
    """Weighted blend between two values of the same type."""

    def __call__(self, value_from: T, value_to: T, t: float) -> T: ...


def lerp_scalar(value_from: float, value_to: float, t: float) -> float:
    """Linear interpolation between two floats."""
    return value_from + (value_to - value_from) * t


def lerp_vector(value_from: np.ndarray, value_to: np.ndarray, t: float) -> np.ndarray:
    """Component-wise linear interpolation between two vectors."""
    a = np.asarray(value_from, dtype=np.float64)
    b = np.asarray(value_to, dtype=np.float64)
    return a + (b - a) * t


def _normalize(q: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(q)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero quaternion")
    return q / norm


def slerp_quaternion(value_from: np.ndarray, value_to: np.ndarray, t: float) -> np.ndarray:
    """Spherical interpolation between two rotations.

    Args:
        value_from: Start quaternion as (x, y, z, w)
        value_to: End quaternion as (x, y, z, w)
        t: Blend fraction

    Returns:
        Unit quaternion along the shortest arc
    """
    q0 = _normalize(np.asarray(value_from, dtype=np.float64))
    q1 = _normalize(np.asarray(value_to, dtype=np.float64))

    dot = float(np.dot(q0, q1))
    if dot < 0.0:
        q1 = -q1
        dot = -dot

    if dot > SLERP_DOT_THRESHOLD:
        return _normalize(q0 + (q1 - q0) * t)

    theta_0 = np.arccos(dot)
    theta = theta_0 * t
    sin_theta_0 = np.sin(theta_0)

    s0 = np.cos(theta) - dot * np.sin(theta) / sin_theta_0
    s1 = np.sin(theta) / sin_theta_0
    return s0 * q0 + s1 * q1


@dataclass(frozen=True)
class TransformData:
    """Position and rotation pair replicated for a remote entity.

    Attributes:
        position: World position, shape (3,)
        rotation: Unit quaternion (x, y, z, w), shape (4,)
    """

    position: np.ndarray
    rotation: np.ndarray


def lerp_transform(value_from: TransformData, value_to: TransformData, t: float) -> TransformData:
    """Lerp position and slerp rotation."""
    return TransformData(
        position=lerp_vector(value_from.position, value_to.position, t),
        rotation=slerp_quaternion(value_from.rotation, value_to.rotation, t),
    )
