"""Summary metrics computation.

Computes distributional statistics of final prices, regime usage shares,
and the per-trade downside profile of an activity level.
"""

import numpy as np
from regime_pathways.model.regimes import ActivityLevel


def compute_summary_metrics(
    final_prices: np.ndarray,
    starting_price: float,
    trades: int | None = None,
) -> dict[str, float]:
    """Compute summary statistics for a set of final prices.

    Args:
        final_prices: Array of final prices from N simulations
        starting_price: Initial price (for growth and downside probability)
        trades: Trades per path; enables avg_growth_per_trade when given

    Returns:
        Dictionary with keys:
            - mean: Mean final price
            - p10: 10th percentile
            - p50: 50th percentile (median)
            - p90: 90th percentile
            - prob_down: Probability that the final price < starting price
            - total_growth: Growth of the mean over the starting price, percent
            - avg_growth_per_trade: total_growth / trades (only with trades)
    """
    # Overflowed paths hold inf; percentiles between two inf values are nan
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.mean(final_prices))
        p10, p50, p90 = np.percentile(final_prices, [10, 50, 90])
    total_growth = (mean / starting_price - 1) * 100
    summary = {
        "mean": mean,
        "p10": float(p10),
        "p50": float(p50),
        "p90": float(p90),
        "prob_down": float(np.mean(final_prices < starting_price)),
        "total_growth": float(total_growth),
    }
    if trades:
        summary["avg_growth_per_trade"] = float(total_growth / trades)
    return summary


def compute_regime_breakdown(
    counts: np.ndarray,
    names: list[str],
    total_selections: int,
) -> dict[str, float]:
    """Convert regime selection counts into percentages.

    Args:
        counts: Selection count per regime, aligned with names
        names: Regime names in declaration order
        total_selections: Number of selection events (trades * simulations)

    Returns:
        Mapping from regime name to share of selections in percent
    """
    return {
        name: float(count) / total_selections * 100
        for name, count in zip(names, counts)
    }


def compute_risk_profile(activity_level: ActivityLevel) -> dict[str, float]:
    """Per-trade downside exposure of an activity level.

    Returns:
        Dictionary with keys:
            - loss_probability: Summed probability (percent) of regimes that
              can move the price down
            - max_loss_per_trade: Most negative min_change, or 0.0
    """
    loss_probability = 0.0
    max_loss = 0.0
    for regime in activity_level.regimes:
        if regime.min_change < 0:
            loss_probability += regime.probability
            max_loss = min(max_loss, regime.min_change)
    return {
        "loss_probability": loss_probability,
        "max_loss_per_trade": max_loss,
    }
