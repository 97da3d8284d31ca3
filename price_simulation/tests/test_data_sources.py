"""Tests for configuration-backed data sources."""

import pytest
from regime_pathways.config.loader import default_config
from regime_pathways.data.sources.config_source import ConfigActivityLevelProvider


def test_config_activity_level_provider_lists_levels():
    """Test that levels are listed in configuration order."""
    provider = ConfigActivityLevelProvider(default_config())
    assert provider.list_activity_levels() == ["cold", "warm", "hot"]


def test_config_activity_level_provider_resolves_aliases():
    """Test lookup by canonical name and alias."""
    provider = ConfigActivityLevelProvider(default_config())

    assert provider.get_activity_level("warm").name == "warm"
    assert provider.get_activity_level("Normal").name == "warm"
    assert provider.get_activity_level("high").label == "HOT (High Activity)"

    with pytest.raises(KeyError, match="Unknown activity level"):
        provider.get_activity_level("unknown")
