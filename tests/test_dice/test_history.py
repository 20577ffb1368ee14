"""Tests for the in-memory roll history."""

import random
import threading

import pytest

from src.config import Settings
from src.dice.combat import roll_damage
from src.dice.custom import roll_custom_dice
from src.dice.history import (
    DiceRollHistory,
    create_dice_history,
    format_roll_summary,
    get_dice_history,
)
from src.dice.legacy import roll_legacy
from src.dice.pool import roll_dice_pool
from src.dice.types import DiceExpression


class TestAddAndOrder:
    """Tests for adding entries and their order."""

    def test_starts_empty(self, history):
        """Test that a new history is empty."""
        assert history.size() == 0
        assert history.get_all() == []

    def test_most_recent_first(self, history):
        """Test that the newest entry comes first."""
        first = roll_dice_pool(2, "d6")
        second = roll_damage(1, 8)
        history.add(first)
        history.add(second)
        assert history.get_all()[0] is second
        assert history.get_all()[1] is first

    def test_accepts_every_variant(self, history):
        """Test that pool, damage and custom results can be stored."""
        history.add(roll_dice_pool(1, "d6"))
        history.add(roll_damage(1, 6))
        history.add(roll_custom_dice(20, 1))
        assert history.size() == 3

    def test_rejects_non_results(self, history):
        """Test that arbitrary objects are refused."""
        with pytest.raises(TypeError):
            history.add(DiceExpression(1, 20))
        assert history.size() == 0

    def test_rejects_legacy_results(self, history):
        """Test that legacy keep-one rolls are not history entries."""
        with pytest.raises(TypeError):
            history.add(roll_legacy(1))

    def test_get_all_returns_copy(self, history):
        """Test that mutating the returned list does not touch the log."""
        history.add(roll_dice_pool(1, "d6"))
        entries = history.get_all()
        entries.clear()
        assert history.size() == 1


class TestCapacity:
    """Tests for the entry cap."""

    def test_default_cap_is_fifty(self, history):
        """Test the default maximum."""
        assert history.max_entries == 50

    def test_oldest_entry_dropped(self):
        """Test that the oldest entry is evicted past the cap."""
        history = DiceRollHistory(max_entries=2)
        first = roll_custom_dice(6, 1)
        second = roll_custom_dice(6, 1)
        third = roll_custom_dice(6, 1)
        for entry in (first, second, third):
            history.add(entry)
        assert history.size() == 2
        assert history.get_all() == [third, second]

    def test_invalid_cap(self):
        """Test that a cap below one is rejected."""
        with pytest.raises(ValueError):
            DiceRollHistory(max_entries=0)


class TestQueries:
    """Tests for get_last, size and the container protocol."""

    def test_get_last(self, history):
        """Test that get_last returns the newest entries."""
        entries = [roll_custom_dice(6, 1) for _ in range(5)]
        for entry in entries:
            history.add(entry)
        assert history.get_last(2) == [entries[4], entries[3]]

    def test_get_last_more_than_available(self, history):
        """Test that asking for too many returns everything."""
        history.add(roll_custom_dice(6, 1))
        assert len(history.get_last(10)) == 1

    def test_get_last_zero(self, history):
        """Test that zero or negative counts return nothing."""
        history.add(roll_custom_dice(6, 1))
        assert history.get_last(0) == []
        assert history.get_last(-1) == []

    def test_len_and_iter(self, history):
        """Test that len() and iteration mirror size() and get_all()."""
        first = roll_dice_pool(1, "d6")
        second = roll_dice_pool(1, "d6")
        history.add(first)
        history.add(second)
        assert len(history) == 2
        assert list(history) == [second, first]


class TestClear:
    """Tests for clearing the history."""

    def test_clear(self, history):
        """Test that clear empties the log."""
        history.add(roll_dice_pool(2, "d6"))
        history.add(roll_damage(1, 6))
        history.clear()
        assert history.size() == 0
        assert history.get_all() == []

    def test_add_after_clear(self, history):
        """Test that the log is usable after clearing."""
        history.add(roll_dice_pool(2, "d6"))
        history.clear()
        entry = roll_damage(1, 6)
        history.add(entry)
        assert history.get_all() == [entry]


class TestConcurrency:
    """Tests for shared use across threads."""

    def test_concurrent_adds(self):
        """Test that concurrent writers lose no entries."""
        history = DiceRollHistory(max_entries=1000)

        def writer():
            for _ in range(100):
                history.add(roll_custom_dice(6, 1))

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert history.size() == 400


class TestSharedHistory:
    """Tests for the process-wide history."""

    def test_same_instance(self):
        """Test that get_dice_history returns one shared log."""
        assert get_dice_history() is get_dice_history()

    def test_uses_configured_cap(self, monkeypatch):
        """Test that the cap comes from settings."""
        monkeypatch.setenv("HISTORY_MAX_ENTRIES", "7")
        assert get_dice_history().max_entries == 7

    def test_create_with_explicit_settings(self):
        """Test building a history from given settings."""
        history = create_dice_history(Settings(_env_file=None, history_max_entries=3))
        assert history.max_entries == 3

    def test_seed_makes_rolls_reproducible(self):
        """Test that a configured seed is applied."""
        settings = Settings(_env_file=None, dice_seed=42)
        create_dice_history(settings)
        first = roll_custom_dice(20, 5).rolls
        create_dice_history(settings)
        second = roll_custom_dice(20, 5).rolls
        assert first == second

    def test_seed_leaves_global_random_alone(self):
        """Test that building a seeded history keeps the random module's state."""
        settings = Settings(_env_file=None, dice_seed=42)
        random.seed(99)
        expected = random.random()

        random.seed(99)
        create_dice_history(settings)
        create_dice_history(settings)
        assert random.random() == expected


class TestFormatRollSummary:
    """Tests for format_roll_summary."""

    def test_with_context(self):
        """Test that context is appended in parentheses."""
        result = roll_dice_pool(3, "d6", context="Acrobacia")
        assert format_roll_summary(result) == "3d6 (Acrobacia)"

    def test_without_context(self):
        """Test that the formula stands alone without context."""
        assert format_roll_summary(roll_damage(2, 6, 3)) == "2d6+3"
