"""Configuration-backed data providers.

Concrete implementations of data provider protocols using
configuration-based sources.
"""

from regime_pathways.model.regimes import ActivityLevel
from regime_pathways.config.schema import SimulationConfig


class ConfigActivityLevelProvider:
    """Provides activity levels from a validated configuration."""

    def __init__(self, config: SimulationConfig):
        """Initialize with simulation configuration.

        Args:
            config: Validated SimulationConfig
        """
        self.levels = config.build_activity_levels()
        self.aliases = {}
        for name, level in config.activity_levels.items():
            self.aliases[name.lower()] = name
            for alias in level.aliases:
                self.aliases[alias.lower()] = name

    def get_activity_level(self, name: str) -> ActivityLevel:
        """Get an activity level by name or alias (case-insensitive).

        Raises:
            KeyError: If no level matches the name
        """
        key = name.strip().lower()
        if key not in self.aliases:
            available = ", ".join(sorted(self.aliases))
            raise KeyError(
                f"Unknown activity level '{name}'. Available: {available}"
            )
        return self.levels[self.aliases[key]]

    def list_activity_levels(self) -> list[str]:
        """Get level names in configuration order."""
        return list(self.levels)
