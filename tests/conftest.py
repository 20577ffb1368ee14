"""Core test fixtures for dice engine tests."""

from datetime import datetime

import pytest

from src.config import get_settings
from src.dice.history import DiceRollHistory, get_dice_history


@pytest.fixture(autouse=True)
def reset_cached_singletons():
    """Drop cached settings and the shared history between tests."""
    get_settings.cache_clear()
    get_dice_history.cache_clear()
    yield
    get_settings.cache_clear()
    get_dice_history.cache_clear()


@pytest.fixture
def history() -> DiceRollHistory:
    """Create an empty roll history."""
    return DiceRollHistory()


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed roll time for display tests."""
    return datetime(2024, 5, 17, 14, 30, 5)
