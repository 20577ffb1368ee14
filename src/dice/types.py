"""Dice system type definitions.

Immutable dataclasses for dice expressions and roll results. Every result
variant carries a ``kind`` discriminant so history renderers can dispatch on
it without probing for fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


# Faces at or above this value count as a success in a pool roll.
SUCCESS_THRESHOLD = 6
# A face showing exactly this value cancels one success.
CANCELLATION_VALUE = 1


class DieSize(str, Enum):
    """Die sizes available to pool rolls.

    Each tier represents a proficiency level in the game system:
    d6 (untrained) up to d12 (mastery). The tier is display metadata;
    success thresholds are the same for every size.
    """

    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"

    @property
    def sides(self) -> int:
        """Number of faces on this die."""
        return int(self.value[1:])

    def __str__(self) -> str:
        return self.value


class RollKind(str, Enum):
    """Discriminant for the result variants stored in the history."""

    POOL = "pool"
    DAMAGE = "damage"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DiceExpression:
    """A dice expression like 2d6+3.

    Attributes:
        num_dice: Number of dice to roll.
        die_size: Size of each die (e.g., 6 for d6, 20 for d20).
        modifier: Flat modifier to add to the total.
    """

    num_dice: int
    die_size: int
    modifier: int = 0


@dataclass(frozen=True)
class SingleDieOutcome:
    """One die of a pool roll and how it was classified.

    Attributes:
        value: Face shown by the die.
        die_size: Size of the die that was rolled.
        is_success: Face is 6 or higher.
        is_cancellation: Face is exactly 1.
    """

    value: int
    die_size: DieSize
    is_success: bool
    is_cancellation: bool

    @property
    def is_neutral(self) -> bool:
        """Neither a success nor a cancellation (faces 2-5)."""
        return not self.is_success and not self.is_cancellation


@dataclass(frozen=True)
class PoolResult:
    """Result of a success-counting pool roll.

    Attributes:
        formula: Display formula, e.g. "3d6" or "2d8 (menor)".
        die_size: Size of the dice in the pool.
        dice_count: Number of kept dice (1 for a penalty roll).
        dice: Classified outcome of each kept die.
        rolls: Every face rolled, including the discarded penalty die.
        successes: Kept dice showing 6 or higher.
        cancellations: Kept dice showing 1.
        net_successes: max(0, successes - cancellations).
        is_penalty_roll: Pool collapsed to zero or less; rolled 2, kept lower.
        dice_modifier: Situational +Nd/-Nd the caller already applied.
        context: Optional label, e.g. "Teste de Acrobacia".
        timestamp: When the roll was made.
    """

    formula: str
    die_size: DieSize
    dice_count: int
    dice: tuple[SingleDieOutcome, ...]
    rolls: tuple[int, ...]
    successes: int
    cancellations: int
    net_successes: int
    is_penalty_roll: bool = False
    dice_modifier: int = 0
    context: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    kind: RollKind = field(default=RollKind.POOL, init=False)

    @property
    def neutral_count(self) -> int:
        """Kept dice that neither succeeded nor cancelled."""
        return sum(1 for die in self.dice if die.is_neutral)

    @property
    def kept_values(self) -> tuple[int, ...]:
        """Faces of the dice that count toward the result."""
        return tuple(die.value for die in self.dice)


@dataclass(frozen=True)
class DamageResult:
    """Result of a damage roll (sum of dice plus modifier).

    Attributes:
        formula: Display formula, e.g. "2d6+3".
        dice_type: Faces per die.
        dice_count: Number of dice rolled.
        rolls: Each die's result.
        modifier: Flat modifier.
        base_result: Sum of rolls.
        final_result: base_result + modifier.
        is_critical: Set by the caller when its rules call the hit critical.
        context: Optional label.
        timestamp: When the roll was made.
    """

    formula: str
    dice_type: int
    dice_count: int
    rolls: tuple[int, ...]
    modifier: int
    base_result: int
    final_result: int
    is_critical: bool = False
    context: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    kind: RollKind = field(default=RollKind.DAMAGE, init=False)


@dataclass(frozen=True)
class CustomResult:
    """Result of a free-form NdY roll.

    When ``summed`` is False the individual ``rolls`` are the result and
    ``total`` is not meaningful.
    """

    formula: str
    dice_type: int
    dice_count: int
    rolls: tuple[int, ...]
    modifier: int
    total: int
    summed: bool = True
    context: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    kind: RollKind = field(default=RollKind.CUSTOM, init=False)


HistoryEntry = PoolResult | DamageResult | CustomResult

HISTORY_ENTRY_TYPES = (PoolResult, DamageResult, CustomResult)


def is_pool_result(entry: HistoryEntry) -> bool:
    """Check whether a history entry is a pool roll."""
    return getattr(entry, "kind", None) == RollKind.POOL


def is_damage_result(entry: HistoryEntry) -> bool:
    """Check whether a history entry is a damage roll."""
    return getattr(entry, "kind", None) == RollKind.DAMAGE


def is_custom_result(entry: HistoryEntry) -> bool:
    """Check whether a history entry is a custom roll."""
    return getattr(entry, "kind", None) == RollKind.CUSTOM
