"""Tests for the regime-sampling price model."""

import numpy as np
import pytest
from regime_pathways.model import MODEL_REGISTRY, get_model
from regime_pathways.model.catalog import HOT_ACTIVITY, WARM_ACTIVITY
from regime_pathways.model.dynamics import RegimeSamplingModel


def test_simulate_path_deterministic():
    """Test that a path is reproducible for a fixed seed."""
    model = RegimeSamplingModel(WARM_ACTIVITY)

    path1 = model.simulate_path(2_000_000, 20, np.random.default_rng(42))
    path2 = model.simulate_path(2_000_000, 20, np.random.default_rng(42))

    np.testing.assert_array_equal(path1.prices, path2.prices)
    np.testing.assert_array_equal(path1.regime_indices, path2.regime_indices)


def test_simulate_path_applies_changes_multiplicatively():
    """Test that each price equals the previous one times (1 + change / 100)."""
    model = RegimeSamplingModel(WARM_ACTIVITY)
    path = model.simulate_path(2_000_000, 10, np.random.default_rng(7))

    previous = np.concatenate([[2_000_000], path.prices[:-1]])
    np.testing.assert_allclose(path.prices, previous * (1 + path.changes / 100))


def test_changes_stay_inside_selected_regime_bounds():
    """Test that every applied change lies within the chosen regime's range."""
    model = RegimeSamplingModel(HOT_ACTIVITY)
    path = model.simulate_path(2_000_000, 1_000, np.random.default_rng(3))

    lows = HOT_ACTIVITY.min_changes[path.regime_indices]
    highs = HOT_ACTIVITY.max_changes[path.regime_indices]
    assert np.all(path.changes >= lows)
    assert np.all(path.changes <= highs)
    assert np.all(path.prices > 0)


def test_simulate_batch_shapes_and_counts():
    """Test batch output sizes and that every trade is counted once."""
    model = RegimeSamplingModel(WARM_ACTIVITY)
    batch = model.simulate_batch(2_000_000, 30, 500, np.random.default_rng(0))

    assert batch.final_prices.shape == (500,)
    assert batch.regime_counts.shape == (4,)
    assert batch.regime_counts.sum() == 30 * 500
    assert np.all(batch.final_prices > 0)


def test_get_model_unknown_raises():
    """Test registry lookup."""
    assert get_model("regime_sampling") is RegimeSamplingModel
    assert "regime_sampling" in MODEL_REGISTRY
    with pytest.raises(ValueError, match="Unknown model 'gbm'"):
        get_model("gbm")
