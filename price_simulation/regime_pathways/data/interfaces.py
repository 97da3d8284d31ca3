"""Data provider protocol definitions.

Defines the interface for accessing activity level definitions.
These abstractions allow the regime tables to come from other sources later
(on-chain reads, CSV exports) without touching the engine.
"""

from typing import Protocol
from regime_pathways.model.regimes import ActivityLevel


class ActivityLevelProvider(Protocol):
    """Provides activity levels by name."""

    def get_activity_level(self, name: str) -> ActivityLevel:
        """Get an activity level by name or alias.

        Args:
            name: Level name (e.g., "warm") or alias (e.g., "normal")

        Returns:
            The validated ActivityLevel
        """
        ...

    def list_activity_levels(self) -> list[str]:
        """Get the canonical names of all available activity levels."""
        ...
