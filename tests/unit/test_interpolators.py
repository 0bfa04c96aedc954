"""Unit tests for per-type interpolation strategies."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from snapsync.interpolators import (
    TransformData,
    lerp_scalar,
    lerp_transform,
    lerp_vector,
    slerp_quaternion,
)

IDENTITY = np.array([0.0, 0.0, 0.0, 1.0])


def yaw(angle: float) -> np.ndarray:
    """Quaternion (x, y, z, w) for a rotation about Z."""
    return np.array([0.0, 0.0, math.sin(angle / 2.0), math.cos(angle / 2.0)])


def test_lerp_scalar():
    assert lerp_scalar(0.0, 10.0, 0.0) == 0.0
    assert lerp_scalar(0.0, 10.0, 1.0) == 10.0
    assert lerp_scalar(-2.0, 2.0, 0.75) == pytest.approx(1.0)


def test_lerp_vector():
    result = lerp_vector(np.array([0.0, 0.0, 0.0]), np.array([2.0, -4.0, 6.0]), 0.5)
    assert_allclose(result, [1.0, -2.0, 3.0])


def test_lerp_vector_accepts_sequences():
    assert_allclose(lerp_vector([0, 0], [1, 1], 0.25), [0.25, 0.25])


class TestSlerp:
    """Test spherical quaternion interpolation."""

    def test_endpoints(self):
        target = yaw(math.pi / 2)
        assert_allclose(slerp_quaternion(IDENTITY, target, 0.0), IDENTITY, atol=1e-12)
        assert_allclose(slerp_quaternion(IDENTITY, target, 1.0), target, atol=1e-12)

    def test_halfway_angle(self):
        result = slerp_quaternion(IDENTITY, yaw(math.pi / 2), 0.5)
        assert_allclose(result, yaw(math.pi / 4), atol=1e-12)
        assert np.linalg.norm(result) == pytest.approx(1.0)

    def test_takes_shortest_path(self):
        """Negated target represents the same rotation; result stays on the short arc."""
        result = slerp_quaternion(IDENTITY, -yaw(math.pi / 2), 0.5)
        assert_allclose(result, yaw(math.pi / 4), atol=1e-12)

    def test_nearly_parallel_falls_back_to_nlerp(self):
        result = slerp_quaternion(IDENTITY, yaw(1e-6), 0.5)
        assert np.linalg.norm(result) == pytest.approx(1.0)
        assert_allclose(result, yaw(5e-7), atol=1e-9)

    def test_zero_quaternion_rejected(self):
        with pytest.raises(ValueError):
            slerp_quaternion(np.zeros(4), IDENTITY, 0.5)


def test_lerp_transform():
    a = TransformData(position=np.zeros(3), rotation=IDENTITY)
    b = TransformData(position=np.array([4.0, 0.0, 0.0]), rotation=yaw(math.pi / 2))

    result = lerp_transform(a, b, 0.5)

    assert_allclose(result.position, [2.0, 0.0, 0.0])
    assert_allclose(result.rotation, yaw(math.pi / 4), atol=1e-12)
