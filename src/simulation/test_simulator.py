"""
Tests for the truncated-normal simulator.

Progressive sizing:
- Small: Construction and validation (instant)
- Medium: Sample properties against analytic moments (n=20000, <1 second)
"""

import numpy as np
import pytest

from simulation.simulator import TruncatedNormalSimulator


# ============================================================================
# SMALL TESTS
# ============================================================================

def test_small_simulator_init():
    """Bounds are stored as floats."""
    sim = TruncatedNormalSimulator(a=0, b=2)
    assert sim.a == 0.0
    assert sim.b == 2.0
    assert "TruncatedNormalSimulator" in repr(sim)


def test_small_simulator_invalid_bounds():
    """a >= b is rejected."""
    with pytest.raises(ValueError, match="a < b"):
        TruncatedNormalSimulator(a=2.0, b=2.0)


def test_small_sample_invalid_args():
    """Negative n and non-positive sd are rejected."""
    sim = TruncatedNormalSimulator(0.0, 2.0)
    with pytest.raises(ValueError):
        sim.sample(-1, mean=0.5, sd=0.5)
    with pytest.raises(ValueError):
        sim.sample(10, mean=0.5, sd=0.0)


def test_small_sample_shape_and_bounds():
    """Samples have the requested size and stay in [a, b]."""
    sim = TruncatedNormalSimulator(0.0, 2.0)
    x = sim.sample(100, mean=0.5, sd=0.5, random_seed=42)
    assert x.shape == (100,)
    assert np.all((x >= 0.0) & (x <= 2.0))


def test_small_sample_reproducible():
    """Same seed, same sample."""
    sim = TruncatedNormalSimulator(0.0, 2.0)
    x1 = sim.sample(50, mean=0.5, sd=0.5, random_seed=7)
    x2 = sim.sample(50, mean=0.5, sd=0.5, random_seed=7)
    np.testing.assert_array_equal(x1, x2)


# ============================================================================
# MEDIUM TESTS
# ============================================================================

def test_medium_sample_moments():
    """Sample mean and std match the truncated distribution's moments."""
    sim = TruncatedNormalSimulator(0.0, 2.0)
    x = sim.sample(20000, mean=0.5, sd=0.5, random_seed=0)

    assert np.isclose(x.mean(), sim.mean(0.5, 0.5), atol=0.02)
    assert np.isclose(x.std(), sim.std(0.5, 0.5), atol=0.02)


def test_medium_truncation_shifts_mean():
    """Cutting off the left tail moves the mean above the normal mean."""
    sim = TruncatedNormalSimulator(0.0, 2.0)
    assert sim.mean(0.5, 0.5) > 0.5
    assert sim.std(0.5, 0.5) < 0.5
