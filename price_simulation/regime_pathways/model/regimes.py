"""Regime definitions and activity levels.

A regime is a bucket of uniform percentage price changes with a selection
weight. An activity level bundles the regimes that apply to a market of a
given trading intensity; their weights partition 0-100%.
"""

import math
from dataclasses import dataclass, field

import numpy as np

# Tolerance for the sum of regime probabilities within one activity level
PROBABILITY_EPSILON = 1e-6
PROBABILITY_TOTAL = 100.0


class ActivityLevelError(ValueError):
    """Raised when a regime or activity level definition is malformed."""


@dataclass(frozen=True)
class Regime:
    """A single price-change regime.

    Attributes:
        name: Regime identifier (e.g. "BULLISH_TRENDING")
        probability: Selection weight in percent
        min_change: Lower bound of the per-trade change, in percent
        max_change: Upper bound of the per-trade change, in percent
    """

    name: str
    probability: float
    min_change: float
    max_change: float

    def __post_init__(self):
        """Validate parameter ranges."""
        if not self.name:
            raise ActivityLevelError("regime name must be non-empty")
        for attr in ("probability", "min_change", "max_change"):
            value = getattr(self, attr)
            if not math.isfinite(value):
                raise ActivityLevelError(
                    f"{attr} must be a finite number, got {value} for regime '{self.name}'"
                )
        if self.probability < 0:
            raise ActivityLevelError(
                f"probability must be non-negative, got {self.probability} "
                f"for regime '{self.name}'"
            )
        if self.min_change > self.max_change:
            raise ActivityLevelError(
                f"min_change ({self.min_change}) must not exceed max_change "
                f"({self.max_change}) for regime '{self.name}'"
            )
        if self.min_change <= -100:
            raise ActivityLevelError(
                f"min_change must be greater than -100, got {self.min_change} "
                f"for regime '{self.name}'"
            )

    @property
    def midpoint(self) -> float:
        """Mean change of the uniform range, in percent."""
        return (self.min_change + self.max_change) / 2


@dataclass(frozen=True)
class ActivityLevel:
    """An ordered set of regimes for one trading-intensity level.

    The cumulative probability table is built once here. Its last live bound
    is pinned to exactly 100.0 so that every draw in [0, 100) lands on a
    regime with positive probability.
    """

    name: str
    regimes: tuple[Regime, ...]
    label: str | None = None
    _bounds: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        regimes = tuple(self.regimes)
        object.__setattr__(self, "regimes", regimes)

        if not regimes:
            raise ActivityLevelError(
                f"Activity level '{self.name}' must define at least one regime"
            )

        names = [regime.name for regime in regimes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ActivityLevelError(
                f"Activity level '{self.name}' has duplicate regimes: "
                f"{', '.join(duplicates)}"
            )

        total = sum(regime.probability for regime in regimes)
        if abs(total - PROBABILITY_TOTAL) > PROBABILITY_EPSILON:
            raise ActivityLevelError(
                f"Regime probabilities for '{self.name}' sum to {total}, "
                f"expected {PROBABILITY_TOTAL:g}"
            )

        probabilities = np.array([regime.probability for regime in regimes], dtype=float)
        bounds = np.cumsum(probabilities) * (PROBABILITY_TOTAL / total)
        last_live = int(np.flatnonzero(probabilities > 0)[-1])
        bounds[last_live:] = PROBABILITY_TOTAL
        bounds.setflags(write=False)
        object.__setattr__(self, "_bounds", bounds)

    @property
    def display_name(self) -> str:
        return self.label or self.name

    @property
    def names(self) -> list[str]:
        return [regime.name for regime in self.regimes]

    @property
    def probabilities(self) -> np.ndarray:
        return np.array([regime.probability for regime in self.regimes], dtype=float)

    @property
    def min_changes(self) -> np.ndarray:
        return np.array([regime.min_change for regime in self.regimes], dtype=float)

    @property
    def max_changes(self) -> np.ndarray:
        return np.array([regime.max_change for regime in self.regimes], dtype=float)

    @property
    def cumulative_bounds(self) -> np.ndarray:
        """Normalized cumulative upper bounds, one per regime."""
        return self._bounds

    def get(self, name: str) -> Regime:
        """Look up a regime by name.

        Raises:
            KeyError: If the regime is not part of this activity level
        """
        for regime in self.regimes:
            if regime.name == name:
                return regime
        raise KeyError(
            f"Unknown regime '{name}'. Available: {', '.join(self.names)}"
        )

    def select_indices(self, draws: np.ndarray) -> np.ndarray:
        """Map uniform draws in [0, 100) to regime indices.

        The first regime whose cumulative upper bound is strictly greater
        than the draw wins, so a draw sitting exactly on a boundary belongs
        to the following regime.
        """
        return np.searchsorted(self._bounds, draws, side="right")

    def select_regime(self, draw: float) -> Regime:
        """Select the regime for a single draw in [0, 100)."""
        if not 0 <= draw < PROBABILITY_TOTAL:
            raise ValueError(f"draw must lie in [0, 100), got {draw}")
        index = int(self.select_indices(np.asarray(draw)))
        return self.regimes[index]
