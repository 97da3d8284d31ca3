"""Closed-form expectations.

Deterministic counterparts of the Monte Carlo estimates: expected change per
trade for an activity level, compounded price projections, and fixed-rate
growth for comparison.
"""

import numpy as np
from regime_pathways.model.regimes import ActivityLevel


def calculate_expected_change(activity_level: ActivityLevel) -> float:
    """Expected percentage change of a single trade.

    Each regime contributes the midpoint of its uniform range weighted by its
    probability: sum(p / 100 * (min + max) / 2).

    Args:
        activity_level: Activity level to evaluate

    Returns:
        Expected change per trade, in percent
    """
    return sum(
        (regime.probability / 100) * regime.midpoint
        for regime in activity_level.regimes
    )


def project_price(starting_price: float, change_percent: float, trades: int) -> float:
    """Compound a constant per-trade change over a number of trades.

    Args:
        starting_price: Price before the first trade
        change_percent: Change applied on every trade, in percent
        trades: Number of trades (0 returns the starting price unchanged)

    Returns:
        starting_price * (1 + change_percent / 100) ** trades, or inf once the
        result exceeds the float range

    Raises:
        ValueError: If trades is negative
    """
    if trades < 0:
        raise ValueError(f"trades must be non-negative, got {trades}")
    if trades == 0:
        return starting_price
    # Saturates to inf instead of raising OverflowError on long horizons
    with np.errstate(over="ignore"):
        final_price = np.float64(starting_price) * np.power(
            np.float64(1 + change_percent / 100), trades
        )
    return float(final_price)


def project_fixed_growth(
    starting_price: float,
    rates: list[float],
    trades: int,
) -> list[dict[str, float]]:
    """Project prices under simple fixed growth rates.

    Args:
        starting_price: Price before the first trade
        rates: Per-trade growth rates in percent (e.g. [8, 9, 10])
        trades: Number of trades

    Returns:
        One dict per rate with keys rate, final_price, total_growth (percent)
    """
    rows = []
    for rate in rates:
        final_price = project_price(starting_price, rate, trades)
        rows.append({
            "rate": float(rate),
            "final_price": float(final_price),
            "total_growth": float((final_price / starting_price - 1) * 100),
        })
    return rows
