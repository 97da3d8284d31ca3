"""Pydantic configuration schemas.

Defines validated data structures for regimes, activity levels, and simulation config.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from regime_pathways.model.regimes import (
    PROBABILITY_EPSILON,
    PROBABILITY_TOTAL,
    ActivityLevel,
    Regime,
)


class RegimeConfig(BaseModel):
    """Configuration for a single regime.

    Attributes:
        name: Regime identifier
        probability: Selection weight in percent
        min_change: Lower bound of the per-trade change (percent, > -100)
        max_change: Upper bound of the per-trade change (percent)
    """

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1, description="Regime name")
    probability: float = Field(..., ge=0, le=100, description="Selection weight in percent")
    min_change: float = Field(..., gt=-100, description="Minimum change per trade in percent")
    max_change: float = Field(..., description="Maximum change per trade in percent")

    @model_validator(mode="after")
    def validate_range(self):
        """Ensure the change range is well-formed."""
        if self.min_change > self.max_change:
            raise ValueError(
                f"Regime '{self.name}': min_change ({self.min_change}) must not "
                f"exceed max_change ({self.max_change})"
            )
        return self


class ActivityLevelConfig(BaseModel):
    """Configuration for an activity level.

    Attributes:
        label: Human readable name used in reports
        aliases: Alternative names accepted on the command line
        regimes: Regimes in selection order
    """

    label: str | None = Field(default=None, description="Display name")
    aliases: list[str] = Field(default_factory=list)
    regimes: list[RegimeConfig] = Field(..., min_length=1)

    @field_validator("regimes")
    @classmethod
    def validate_probabilities(cls, regimes):
        """Ensure regime names are unique and probabilities sum to 100."""
        names = [regime.name for regime in regimes]
        if len(set(names)) != len(names):
            raise ValueError(f"Regime names must be unique, got {', '.join(names)}")

        total = sum(regime.probability for regime in regimes)
        if abs(total - PROBABILITY_TOTAL) > PROBABILITY_EPSILON:
            raise ValueError(
                f"Regime probabilities sum to {total}, expected {PROBABILITY_TOTAL:g}"
            )
        return regimes

    def to_activity_level(self, name: str) -> ActivityLevel:
        """Build the immutable domain ActivityLevel."""
        return ActivityLevel(
            name=name,
            label=self.label,
            regimes=tuple(
                Regime(
                    name=regime.name,
                    probability=regime.probability,
                    min_change=regime.min_change,
                    max_change=regime.max_change,
                )
                for regime in self.regimes
            ),
        )


class SimulationDefaults(BaseModel):
    """Default simulation parameters.

    Attributes:
        starting_price: Price before the first trade, USDC smallest units
        trades: Number of trades per path
        n_simulations: Number of Monte Carlo paths per activity level
        sample_trades: Maximum length of the illustrative trajectory
        seed: Base random seed (None draws fresh entropy)
    """

    model_config = ConfigDict(allow_inf_nan=False)

    starting_price: float = Field(default=2_000_000, gt=0)
    trades: int = Field(default=50, gt=0)
    n_simulations: int = Field(default=10_000, gt=0)
    sample_trades: int = Field(default=10, ge=0)
    seed: int | None = Field(default=None, ge=0)


class SimulationConfig(BaseModel):
    """Top-level simulation configuration.

    Attributes:
        model: Name of the dynamics model to use
        activity_levels: Mapping from activity level name to its regimes
        defaults: Default simulation parameters
        growth_rates: Fixed per-trade growth rates (percent) to compare against
    """

    model_config = ConfigDict(allow_inf_nan=False)

    model: str = Field(default="regime_sampling", description="Dynamics model name")
    activity_levels: dict[str, ActivityLevelConfig] = Field(..., min_length=1)
    defaults: SimulationDefaults = Field(default_factory=SimulationDefaults)
    growth_rates: list[float] = Field(default_factory=lambda: [8.0, 9.0, 10.0])

    @field_validator("activity_levels")
    @classmethod
    def validate_aliases(cls, activity_levels):
        """Ensure names and aliases resolve to exactly one activity level."""
        seen: dict[str, str] = {}
        for level_name, level in activity_levels.items():
            for key in [level_name, *level.aliases]:
                key = key.lower()
                if key in seen and seen[key] != level_name:
                    raise ValueError(
                        f"Name '{key}' is used by both '{seen[key]}' and '{level_name}'"
                    )
                seen[key] = level_name
        return activity_levels

    def build_activity_levels(self) -> dict[str, ActivityLevel]:
        """Convert every configured level into a domain ActivityLevel."""
        return {
            name: level.to_activity_level(name)
            for name, level in self.activity_levels.items()
        }
