"""Pure simulation engine.

Core simulation logic that is deterministic given a seed, dependency-injected,
and agnostic to I/O operations.
"""

import math

import numpy as np
import pandas as pd
import structlog
from pydantic import BaseModel, ConfigDict, Field
from regime_pathways.model.dynamics import RegimeSamplingModel
from regime_pathways.model.interfaces import PriceDynamics
from regime_pathways.model.regimes import ActivityLevel
from regime_pathways.engine.expected import calculate_expected_change, project_price
from regime_pathways.engine.metrics import (
    compute_regime_breakdown,
    compute_risk_profile,
    compute_summary_metrics,
)

logger = structlog.get_logger()

DEFAULT_NUM_SIMULATIONS = 10_000
DEFAULT_SAMPLE_TRADES = 10

# Upper bound on random draws held in memory per batch (paths * trades)
MAX_DRAWS_PER_BATCH = 1_000_000


class TradeStep(BaseModel):
    """One step of the illustrative sample trajectory.

    Attributes:
        trade: 1-based trade index
        price: Price after the trade
        regime: Name of the regime selected for the trade
        change: Percentage change applied
    """

    trade: int
    price: float
    regime: str
    change: float


class SimulationRun(BaseModel):
    """Outcome of simulating one activity level.

    Attributes:
        activity_level: Name of the simulated activity level
        label: Display name of the activity level
        starting_price: Price before the first trade
        trades: Trades per simulated path
        n_simulations: Number of Monte Carlo paths
        seed: Seed used for the random streams (None if drawn from entropy)
        expected_change_per_trade: Closed-form expected change, percent
        expected_final_price: Closed-form compounded final price
        final_price: Mean simulated final price
        regime_breakdown: Share of regime selections per regime, percent
        sample_trajectory: Short path for illustration
        summary: Distribution metrics of final prices
        risk: Per-trade downside profile of the activity level
        final_prices: Raw final price of every path (not serialized)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    activity_level: str
    label: str | None = None
    starting_price: float
    trades: int
    n_simulations: int
    seed: int | None = None
    expected_change_per_trade: float
    expected_final_price: float
    final_price: float
    regime_breakdown: dict[str, float]
    sample_trajectory: list[TradeStep]
    summary: dict[str, float]
    risk: dict[str, float]
    final_prices: np.ndarray = Field(exclude=True, repr=False)


class SimulationResult(BaseModel):
    """Container for a multi-level simulation.

    Attributes:
        final_prices: DataFrame with columns [activity_level, path_id, final_price]
        runs: Mapping from activity level name to its SimulationRun
        summary: Nested dict {activity_level: {metric: value}}
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    final_prices: pd.DataFrame
    runs: dict[str, SimulationRun]
    summary: dict[str, dict[str, float]]


def _validate_inputs(
    starting_price: float,
    trades: int,
    n_simulations: int,
    sample_trades: int,
):
    if not (math.isfinite(starting_price) and starting_price > 0):
        raise ValueError(f"starting_price must be positive, got {starting_price}")
    if trades < 1:
        raise ValueError(f"trades must be a positive integer, got {trades}")
    if n_simulations < 1:
        raise ValueError(f"n_simulations must be a positive integer, got {n_simulations}")
    if sample_trades < 0:
        raise ValueError(f"sample_trades must be non-negative, got {sample_trades}")


def simulate_trades(
    starting_price: float,
    trades: int,
    activity_level: ActivityLevel,
    n_simulations: int = DEFAULT_NUM_SIMULATIONS,
    sample_trades: int = DEFAULT_SAMPLE_TRADES,
    seed: int | None = None,
    model: PriceDynamics | None = None,
) -> SimulationRun:
    """Estimate the price after a number of trades for one activity level.

    Paths are simulated in batches. Every batch and the sample trajectory
    draw from their own child stream of a single SeedSequence, so runs stay
    independent and the whole result is reproducible for a fixed seed.

    Args:
        starting_price: Price before the first trade (USDC smallest units)
        trades: Number of sequential trades per path
        activity_level: Regimes to sample from
        n_simulations: Number of Monte Carlo paths
        sample_trades: Maximum length of the sample trajectory
        seed: Base random seed; None draws fresh OS entropy
        model: Dynamics model; defaults to RegimeSamplingModel(activity_level);
            must have been built for the same activity_level

    Returns:
        SimulationRun with closed-form and simulated results

    Raises:
        ValueError: If any numeric input is out of range or the model was
            built for another activity level
    """
    _validate_inputs(starting_price, trades, n_simulations, sample_trades)
    if model is None:
        model = RegimeSamplingModel(activity_level)
    elif model.activity_level is not activity_level:
        raise ValueError(
            f"model was built for activity level '{model.activity_level.name}', "
            f"not '{activity_level.name}'"
        )

    log = logger.bind(activity_level=activity_level.name, trades=trades)
    log.info("simulation_started", n_simulations=n_simulations, seed=seed)

    expected_change = calculate_expected_change(activity_level)
    expected_final = project_price(starting_price, expected_change, trades)

    batch_size = max(1, MAX_DRAWS_PER_BATCH // trades)
    n_batches = math.ceil(n_simulations / batch_size)
    paths_seq, sample_seq = np.random.SeedSequence(seed).spawn(2)

    final_prices = np.empty(n_simulations)
    regime_counts = np.zeros(len(activity_level.regimes), dtype=np.int64)
    for batch_id, batch_seq in enumerate(paths_seq.spawn(n_batches)):
        start = batch_id * batch_size
        stop = min(start + batch_size, n_simulations)
        batch = model.simulate_batch(
            starting_price, trades, stop - start, np.random.default_rng(batch_seq)
        )
        final_prices[start:stop] = batch.final_prices
        regime_counts += batch.regime_counts

    regime_breakdown = compute_regime_breakdown(
        regime_counts, activity_level.names, trades * n_simulations
    )

    sample_length = min(trades, sample_trades)
    sample_trajectory = []
    if sample_length:
        path = model.simulate_path(
            starting_price, sample_length, np.random.default_rng(sample_seq)
        )
        sample_trajectory = [
            TradeStep(
                trade=step + 1,
                price=float(path.prices[step]),
                regime=activity_level.regimes[int(path.regime_indices[step])].name,
                change=float(path.changes[step]),
            )
            for step in range(sample_length)
        ]

    summary = compute_summary_metrics(final_prices, starting_price, trades)
    log.info(
        "simulation_finished",
        expected_final_price=round(expected_final, 2),
        final_price=round(summary["mean"], 2),
    )

    return SimulationRun(
        activity_level=activity_level.name,
        label=activity_level.label,
        starting_price=starting_price,
        trades=trades,
        n_simulations=n_simulations,
        seed=seed,
        expected_change_per_trade=expected_change,
        expected_final_price=expected_final,
        final_price=summary["mean"],
        regime_breakdown=regime_breakdown,
        sample_trajectory=sample_trajectory,
        summary=summary,
        risk=compute_risk_profile(activity_level),
        final_prices=final_prices,
    )


def run_activity_levels(
    starting_price: float,
    trades: int,
    activity_levels: list[ActivityLevel],
    n_simulations: int = DEFAULT_NUM_SIMULATIONS,
    sample_trades: int = DEFAULT_SAMPLE_TRADES,
    seed: int | None = None,
    model_cls: type | None = None,
) -> SimulationResult:
    """Run the Monte Carlo simulation for several activity levels.

    Every level is simulated with the same seed, so the comparison between
    levels uses common random numbers.

    Args:
        starting_price: Price before the first trade
        trades: Trades per path
        activity_levels: Levels to simulate, in report order
        n_simulations: Number of Monte Carlo paths per level
        sample_trades: Maximum length of each sample trajectory
        seed: Base random seed for reproducibility
        model_cls: Dynamics model class taking an ActivityLevel; defaults to
            RegimeSamplingModel

    Returns:
        SimulationResult containing the final prices DataFrame and per-level runs

    Raises:
        ValueError: If no levels are given or two levels share a name
    """
    if not activity_levels:
        raise ValueError("At least one activity level is required")
    names = [level.name for level in activity_levels]
    if len(set(names)) != len(names):
        raise ValueError(f"Activity level names must be unique, got {', '.join(names)}")

    model_cls = model_cls or RegimeSamplingModel

    runs = {}
    frames = []
    for level in activity_levels:
        run = simulate_trades(
            starting_price,
            trades,
            level,
            n_simulations=n_simulations,
            sample_trades=sample_trades,
            seed=seed,
            model=model_cls(level),
        )
        runs[level.name] = run
        frames.append(pd.DataFrame({
            "activity_level": level.name,
            "path_id": np.arange(n_simulations),
            "final_price": run.final_prices,
        }))

    df = pd.concat(frames, ignore_index=True)
    summaries = {name: run.summary for name, run in runs.items()}

    return SimulationResult(final_prices=df, runs=runs, summary=summaries)
