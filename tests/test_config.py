"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from src.config import Settings, get_settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_history_size(self, monkeypatch):
        """Default history keeps 50 rolls."""
        monkeypatch.delenv("HISTORY_MAX_ENTRIES", raising=False)
        settings = Settings(_env_file=None)
        assert settings.history_max_entries == 50

    def test_default_seed_is_none(self, monkeypatch):
        """Dice are unseeded by default."""
        monkeypatch.delenv("DICE_SEED", raising=False)
        settings = Settings(_env_file=None)
        assert settings.dice_seed is None


class TestSettingsFromEnvironment:
    """Tests for environment overrides."""

    def test_history_size_from_env(self, monkeypatch):
        """HISTORY_MAX_ENTRIES overrides the cap."""
        monkeypatch.setenv("HISTORY_MAX_ENTRIES", "10")
        assert Settings(_env_file=None).history_max_entries == 10

    def test_seed_from_env_case_insensitive(self, monkeypatch):
        """Environment names are case-insensitive."""
        monkeypatch.setenv("dice_seed", "99")
        assert Settings(_env_file=None).dice_seed == 99

    def test_history_size_must_be_positive(self, monkeypatch):
        """A cap below one is rejected."""
        monkeypatch.setenv("HISTORY_MAX_ENTRIES", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_cached(self):
        """get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear(self):
        """Clearing the cache builds a new instance."""
        first = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not first
