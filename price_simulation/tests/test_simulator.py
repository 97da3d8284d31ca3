"""Tests for the Monte Carlo simulation engine."""

import math

import numpy as np
import pytest
from regime_pathways.engine import simulator
from regime_pathways.engine.simulator import run_activity_levels, simulate_trades
from regime_pathways.model.catalog import COLD_ACTIVITY, HOT_ACTIVITY, WARM_ACTIVITY
from regime_pathways.model.dynamics import RegimeSamplingModel
from regime_pathways.model.regimes import ActivityLevel, Regime


def test_simulate_trades_deterministic():
    """Test that simulate_trades is deterministic with a fixed seed."""
    run1 = simulate_trades(2_000_000, 20, WARM_ACTIVITY, n_simulations=500, seed=42)
    run2 = simulate_trades(2_000_000, 20, WARM_ACTIVITY, n_simulations=500, seed=42)

    np.testing.assert_array_equal(run1.final_prices, run2.final_prices)
    assert run1.regime_breakdown == run2.regime_breakdown
    assert run1.sample_trajectory == run2.sample_trajectory


def test_monte_carlo_mean_matches_closed_form():
    """Test that the simulated mean converges to the expected final price."""
    run = simulate_trades(2_000_000, 50, WARM_ACTIVITY, seed=2024)

    assert run.n_simulations == 10_000
    assert run.final_price == pytest.approx(run.expected_final_price, rel=0.05)
    assert run.final_price == pytest.approx(run.summary["mean"])


def test_regime_usage_matches_declared_probabilities():
    """Test that observed regime shares converge to declared probabilities."""
    run = simulate_trades(2_000_000, 50, HOT_ACTIVITY, seed=11)

    assert list(run.regime_breakdown) == HOT_ACTIVITY.names
    assert sum(run.regime_breakdown.values()) == pytest.approx(100.0)
    for regime in HOT_ACTIVITY.regimes:
        assert run.regime_breakdown[regime.name] == pytest.approx(regime.probability, abs=2.0)


def test_sample_trajectory_length_and_bounds():
    """Test sample trajectory size, regime names and per-step bounds."""
    run = simulate_trades(2_000_000, 50, COLD_ACTIVITY, n_simulations=100, seed=5)

    assert len(run.sample_trajectory) == 10
    assert [step.trade for step in run.sample_trajectory] == list(range(1, 11))
    for step in run.sample_trajectory:
        regime = COLD_ACTIVITY.get(step.regime)
        assert regime.min_change <= step.change <= regime.max_change
        assert step.price > 0


def test_sample_trajectory_shorter_than_ten_trades():
    """Test that the sample trajectory never exceeds the number of trades."""
    run = simulate_trades(2_000_000, 3, WARM_ACTIVITY, n_simulations=10, seed=0)
    assert len(run.sample_trajectory) == 3

    run = simulate_trades(2_000_000, 3, WARM_ACTIVITY, n_simulations=10, sample_trades=0, seed=0)
    assert run.sample_trajectory == []


def test_prices_stay_positive():
    """Test that every simulated final price is strictly positive."""
    run = simulate_trades(2_000_000, 50, COLD_ACTIVITY, n_simulations=2_000, seed=9)
    assert np.all(run.final_prices > 0)


def test_batches_cover_every_path(monkeypatch):
    """Test that splitting paths into several batches fills every slot."""
    monkeypatch.setattr(simulator, "MAX_DRAWS_PER_BATCH", 100)
    run = simulate_trades(2_000_000, 30, WARM_ACTIVITY, n_simulations=250, seed=1)

    assert run.final_prices.shape == (250,)
    assert np.all(run.final_prices > 0)
    assert sum(run.regime_breakdown.values()) == pytest.approx(100.0)


def test_single_regime_with_fixed_change_is_exact():
    """Test a degenerate range where every trade applies the same change."""
    level = ActivityLevel(name="steady", regimes=(Regime("STEADY", 100, 10, 10),))
    run = simulate_trades(1_000_000, 2, level, n_simulations=50, seed=0)

    np.testing.assert_allclose(run.final_prices, 1_210_000)
    assert run.expected_final_price == pytest.approx(1_210_000)
    assert run.regime_breakdown == {"STEADY": 100.0}


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"starting_price": 0}, "starting_price must be positive"),
        ({"starting_price": -5}, "starting_price must be positive"),
        ({"trades": 0}, "trades must be a positive integer"),
        ({"n_simulations": 0}, "n_simulations must be a positive integer"),
        ({"sample_trades": -1}, "sample_trades must be non-negative"),
    ],
)
def test_simulate_trades_rejects_invalid_inputs(kwargs, message):
    """Test that degenerate invocations raise ValueError."""
    params = {
        "starting_price": 2_000_000,
        "trades": 10,
        "activity_level": WARM_ACTIVITY,
        "n_simulations": 10,
        "sample_trades": 10,
    }
    params.update(kwargs)
    with pytest.raises(ValueError, match=message):
        simulate_trades(**params)


def test_run_activity_levels_structure():
    """Test multi-level simulation produces the expected structure."""
    result = run_activity_levels(
        2_000_000, 10, [COLD_ACTIVITY, HOT_ACTIVITY], n_simulations=50, seed=0
    )

    assert list(result.runs) == ["cold", "hot"]
    assert set(result.final_prices["activity_level"].unique()) == {"cold", "hot"}
    assert len(result.final_prices) == 100
    assert list(result.final_prices.columns) == ["activity_level", "path_id", "final_price"]
    assert set(result.summary) == {"cold", "hot"}


def test_run_activity_levels_rejects_duplicates():
    """Test that the same level cannot be simulated twice in one result."""
    with pytest.raises(ValueError, match="must be unique"):
        run_activity_levels(2_000_000, 10, [WARM_ACTIVITY, WARM_ACTIVITY], n_simulations=10)

    with pytest.raises(ValueError, match="At least one activity level"):
        run_activity_levels(2_000_000, 10, [], n_simulations=10)


def test_simulation_run_serialization_excludes_raw_prices():
    """Test that dumping a run leaves out the per-path array."""
    run = simulate_trades(2_000_000, 5, WARM_ACTIVITY, n_simulations=20, seed=3)
    payload = run.model_dump(mode="json")

    assert "final_prices" not in payload
    assert payload["activity_level"] == "warm"
    assert len(payload["sample_trajectory"]) == 5


def test_long_horizon_saturates_instead_of_raising():
    """Test that prices beyond the float range come back as inf."""
    run = simulate_trades(2_000_000, 5_000, HOT_ACTIVITY, n_simulations=10, seed=0)

    assert run.expected_final_price == math.inf
    assert run.final_price == math.inf
    assert len(run.sample_trajectory) == 10
    assert sum(run.regime_breakdown.values()) == pytest.approx(100.0)


def test_simulate_trades_rejects_model_for_other_level():
    """Test that the model must be built for the simulated activity level."""
    with pytest.raises(ValueError, match="model was built for activity level 'cold'"):
        simulate_trades(
            2_000_000, 5, WARM_ACTIVITY, n_simulations=10, seed=0,
            model=RegimeSamplingModel(COLD_ACTIVITY),
        )
