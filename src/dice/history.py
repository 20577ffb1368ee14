"""In-memory roll history.

Keeps the most recent rolls, newest first, for history panels to poll.
Nothing is persisted: the log lives as long as the process does or until
it is cleared.
"""

import logging
import threading
from functools import lru_cache
from typing import Iterator

from src.config import Settings, get_settings
from src.dice.roller import seed_dice
from src.dice.types import HISTORY_ENTRY_TYPES, HistoryEntry


logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50


class DiceRollHistory:
    """Ordered log of roll results, most recent first.

    All operations take an internal lock, so one instance can be shared by
    every thread of the host process. When the log grows past
    ``max_entries`` the oldest entry is dropped.

    Example:
        >>> history = DiceRollHistory()
        >>> history.add(first)
        >>> history.add(second)
        >>> history.get_all()[0] is second
        True
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: list[HistoryEntry] = []
        self._lock = threading.Lock()

    def add(self, entry: HistoryEntry) -> None:
        """Record a roll at the front of the log.

        Raises:
            TypeError: If entry is not a pool, damage or custom result.
        """
        if not isinstance(entry, HISTORY_ENTRY_TYPES):
            raise TypeError(
                f"Cannot add {type(entry).__name__} to roll history; "
                "expected PoolResult, DamageResult or CustomResult"
            )

        with self._lock:
            self._entries.insert(0, entry)
            if len(self._entries) > self.max_entries:
                dropped = self._entries.pop()
                logger.debug(f"Roll history full, dropped {dropped.formula}")

        logger.debug(f"Roll recorded: {format_roll_summary(entry)}")

    def get_all(self) -> list[HistoryEntry]:
        """Return a copy of every entry, most recent first."""
        with self._lock:
            return list(self._entries)

    def get_last(self, count: int) -> list[HistoryEntry]:
        """Return at most ``count`` of the most recent entries."""
        if count <= 0:
            return []
        with self._lock:
            return self._entries[:count]

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            removed = len(self._entries)
            self._entries = []
        logger.debug(f"Roll history cleared ({removed} entries)")

    def size(self) -> int:
        """Number of entries currently held."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.get_all())


def create_dice_history(settings: Settings | None = None) -> DiceRollHistory:
    """Build a history from settings, seeding the dice if configured."""
    settings = settings or get_settings()
    if settings.dice_seed is not None:
        seed_dice(settings.dice_seed)
    return DiceRollHistory(max_entries=settings.history_max_entries)


@lru_cache
def get_dice_history() -> DiceRollHistory:
    """Get the process-wide roll history.

    Created on first use from the application settings. Code that needs
    its own log (tests, a second table) constructs a DiceRollHistory and
    passes it explicitly instead.
    """
    return create_dice_history()


def format_roll_summary(entry: HistoryEntry) -> str:
    """Compact one-line description of a roll.

    Examples:
        >>> format_roll_summary(result)  # formula "3d6", context "Acrobacia"
        '3d6 (Acrobacia)'
    """
    if entry.context:
        return f"{entry.formula} ({entry.context})"
    return entry.formula
