"""Unit tests for ExponentialMovingAverage."""

import math

import pytest

from snapsync.ema import ExponentialMovingAverage


def test_first_sample_seeds_average():
    """EMA starts at the first sample rather than zero."""
    ema = ExponentialMovingAverage(alpha=0.1)
    assert ema.add(5.0) == 5.0
    assert ema.variance == 0.0
    assert ema.initialized


def test_update_rule():
    ema = ExponentialMovingAverage(alpha=0.5)
    ema.add(0.0)
    assert ema.add(10.0) == pytest.approx(5.0)
    assert ema.add(10.0) == pytest.approx(7.5)


def test_variance_tracks_spread():
    ema = ExponentialMovingAverage(alpha=0.2)
    for i in range(200):
        ema.add(1.0 if i % 2 else -1.0)

    assert abs(ema.value) < 0.2
    assert ema.standard_deviation == pytest.approx(math.sqrt(ema.variance))
    assert 0.5 < ema.standard_deviation < 1.5, (
        f"Alternating +/-1 should give std near 1, got {ema.standard_deviation:.3f}"
    )


def test_constant_input_has_zero_variance():
    ema = ExponentialMovingAverage(alpha=0.3)
    for _ in range(50):
        ema.add(0.05)
    assert ema.value == pytest.approx(0.05)
    assert ema.standard_deviation == pytest.approx(0.0, abs=1e-12)


def test_from_window():
    ema = ExponentialMovingAverage.from_window(9)
    assert ema.alpha == pytest.approx(0.2)
    with pytest.raises(ValueError):
        ExponentialMovingAverage.from_window(0)


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_invalid_alpha(alpha):
    with pytest.raises(ValueError):
        ExponentialMovingAverage(alpha=alpha)


def test_reset():
    ema = ExponentialMovingAverage(alpha=0.5)
    ema.add(3.0)
    ema.add(4.0)
    ema.reset()
    assert not ema.initialized
    assert ema.add(10.0) == 10.0
