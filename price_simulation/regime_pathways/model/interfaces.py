"""Protocol definitions for price dynamics models.

This module defines the interface that all per-trade price models must implement,
so the simulator can swap the regime-sampling model for another trade model.
"""

from typing import NamedTuple, Protocol

import numpy as np
from regime_pathways.model.regimes import ActivityLevel


class PathBatch(NamedTuple):
    """Outcome of a batch of simulated trade sequences.

    Attributes:
        final_prices: Final price of each path, shape (n_paths,)
        regime_counts: Number of times each regime was selected, shape (n_regimes,)
    """

    final_prices: np.ndarray
    regime_counts: np.ndarray


class TradePath(NamedTuple):
    """A single simulated trade sequence, step by step.

    Attributes:
        prices: Prices after each trade, shape (trades,)
        regime_indices: Index of the regime selected at each trade
        changes: Percentage change applied at each trade
    """

    prices: np.ndarray
    regime_indices: np.ndarray
    changes: np.ndarray


class PriceDynamics(Protocol):
    """Protocol for per-trade price models.

    A model produces the aggregate outcome of many independent paths and can
    also replay one path step by step for illustration.
    """

    activity_level: ActivityLevel

    def simulate_batch(
        self,
        starting_price: float,
        trades: int,
        n_paths: int,
        rng: np.random.Generator,
    ) -> PathBatch:
        """Simulate n_paths independent trade sequences.

        Args:
            starting_price: Price before the first trade (USDC smallest units)
            trades: Number of sequential trades per path
            n_paths: Number of independent paths
            rng: Random generator owned by this batch

        Returns:
            PathBatch with final prices and regime selection counts
        """
        ...

    def simulate_path(
        self,
        starting_price: float,
        trades: int,
        rng: np.random.Generator,
    ) -> TradePath:
        """Simulate a single trade sequence and keep every step."""
        ...
