"""Configuration file loading and parsing.

Loads and validates YAML configuration files using Pydantic schemas.
"""

import yaml
from pathlib import Path
from regime_pathways.config.schema import SimulationConfig
from regime_pathways.model import catalog


def load_config(config_path: str | Path) -> SimulationConfig:
    """Load and validate simulation configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SimulationConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
        pydantic.ValidationError: If config doesn't match schema
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw_config = yaml.safe_load(f)

    return SimulationConfig(**(raw_config or {}))


def default_config() -> SimulationConfig:
    """Build a configuration holding the built-in cold/warm/hot levels."""
    aliases: dict[str, list[str]] = {}
    for alias, name in catalog.ACTIVITY_ALIASES.items():
        aliases.setdefault(name, []).append(alias)

    return SimulationConfig(
        activity_levels={
            name: {
                "label": level.label,
                "aliases": aliases.get(name, []),
                "regimes": [
                    {
                        "name": regime.name,
                        "probability": regime.probability,
                        "min_change": regime.min_change,
                        "max_change": regime.max_change,
                    }
                    for regime in level.regimes
                ],
            }
            for name, level in catalog.ACTIVITY_LEVELS.items()
        }
    )
