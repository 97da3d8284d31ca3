"""Built-in activity levels.

Probabilities and change ranges (percent) of the four market regimes used by
the opinion pricing engine, for cold, warm and hot topics.
"""

from regime_pathways.model.regimes import ActivityLevel, Regime

CONSOLIDATION = "CONSOLIDATION"
BULLISH_TRENDING = "BULLISH_TRENDING"
MILD_CORRECTION = "MILD_CORRECTION"
PARABOLIC = "PARABOLIC"

# (min_change, max_change) per regime, shared by every activity level
REGIME_RANGES: dict[str, tuple[float, float]] = {
    CONSOLIDATION: (-10.0, 15.0),
    BULLISH_TRENDING: (5.0, 40.0),
    MILD_CORRECTION: (-20.0, 5.0),
    PARABOLIC: (40.0, 80.0),
}

# Regime probabilities (percent) per activity level, in selection order
ACTIVITY_PROBABILITIES: dict[str, dict[str, float]] = {
    "cold": {CONSOLIDATION: 40, BULLISH_TRENDING: 45, MILD_CORRECTION: 13, PARABOLIC: 2},
    "warm": {CONSOLIDATION: 25, BULLISH_TRENDING: 60, MILD_CORRECTION: 13, PARABOLIC: 2},
    "hot": {CONSOLIDATION: 15, BULLISH_TRENDING: 62, MILD_CORRECTION: 13, PARABOLIC: 10},
}

ACTIVITY_LABELS: dict[str, str] = {
    "cold": "COLD (Low Activity)",
    "warm": "WARM (Normal)",
    "hot": "HOT (High Activity)",
}

ACTIVITY_ALIASES: dict[str, str] = {
    "low": "cold",
    "normal": "warm",
    "high": "hot",
}


def _build_level(name: str) -> ActivityLevel:
    regimes = tuple(
        Regime(
            name=regime_name,
            probability=probability,
            min_change=REGIME_RANGES[regime_name][0],
            max_change=REGIME_RANGES[regime_name][1],
        )
        for regime_name, probability in ACTIVITY_PROBABILITIES[name].items()
    )
    return ActivityLevel(name=name, regimes=regimes, label=ACTIVITY_LABELS[name])


COLD_ACTIVITY = _build_level("cold")
WARM_ACTIVITY = _build_level("warm")
HOT_ACTIVITY = _build_level("hot")

ACTIVITY_LEVELS: dict[str, ActivityLevel] = {
    level.name: level for level in (COLD_ACTIVITY, WARM_ACTIVITY, HOT_ACTIVITY)
}


def get_activity_level(name: str) -> ActivityLevel:
    """Get a built-in activity level by name or alias.

    Args:
        name: Level name ("cold", "warm", "hot") or alias ("low", "normal", "high"),
            case-insensitive

    Returns:
        The matching ActivityLevel

    Raises:
        KeyError: If the name matches no level
    """
    key = name.strip().lower()
    key = ACTIVITY_ALIASES.get(key, key)
    if key not in ACTIVITY_LEVELS:
        available = ", ".join([*ACTIVITY_LEVELS, *ACTIVITY_ALIASES])
        raise KeyError(f"Unknown activity level '{name}'. Available: {available}")
    return ACTIVITY_LEVELS[key]
