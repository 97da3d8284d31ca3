"""Regime-sampling per-trade price dynamics.

Implements the multiplicative trade model:
    P_{t+1} = P_t * (1 + c_t / 100),   c_t ~ U[min_{s_t}, max_{s_t}]
where the regime s_t is drawn i.i.d. from the activity level's probabilities.
"""

import numpy as np
from regime_pathways.model.interfaces import PathBatch, PriceDynamics, TradePath
from regime_pathways.model.regimes import PROBABILITY_TOTAL, ActivityLevel


class RegimeSamplingModel(PriceDynamics):
    """I.i.d. regime sampling with uniform changes inside each regime.

    Each trade takes two draws: one uniform in [0, 100) that selects the
    regime through the cumulative probability table, and one uniform inside
    the selected regime's [min_change, max_change] range.
    """

    def __init__(self, activity_level: ActivityLevel):
        """Initialize the model with an activity level.

        Args:
            activity_level: Validated set of regimes to sample from
        """
        self.activity_level = activity_level
        self._min = activity_level.min_changes
        self._span = activity_level.max_changes - self._min

    def _draw(self, rng: np.random.Generator, shape) -> tuple[np.ndarray, np.ndarray]:
        """Draw regime indices and percentage changes for the given shape."""
        selection = rng.random(shape) * PROBABILITY_TOTAL
        indices = self.activity_level.select_indices(selection)
        changes = self._min[indices] + rng.random(shape) * self._span[indices]
        return indices, changes

    def simulate_batch(
        self,
        starting_price: float,
        trades: int,
        n_paths: int,
        rng: np.random.Generator,
    ) -> PathBatch:
        """Simulate n_paths independent trade sequences at once.

        Args:
            starting_price: Price before the first trade
            trades: Number of trades per path
            n_paths: Number of paths in this batch
            rng: Random generator for this batch

        Returns:
            PathBatch with one final price per path and regime counts
        """
        indices, changes = self._draw(rng, (n_paths, trades))
        with np.errstate(over="ignore"):
            final_prices = starting_price * np.prod(1.0 + changes / 100.0, axis=1)
        counts = np.bincount(
            indices.ravel(), minlength=len(self.activity_level.regimes)
        )
        return PathBatch(final_prices=final_prices, regime_counts=counts)

    def simulate_path(
        self,
        starting_price: float,
        trades: int,
        rng: np.random.Generator,
    ) -> TradePath:
        """Simulate one path and keep the regime and change of every trade.

        Returns:
            TradePath with prices after each trade (length = trades)
        """
        indices, changes = self._draw(rng, trades)
        with np.errstate(over="ignore"):
            prices = starting_price * np.cumprod(1.0 + changes / 100.0)
        return TradePath(prices=prices, regime_indices=indices, changes=changes)
