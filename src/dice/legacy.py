"""Legacy single-die rolls with triumph/disaster detection.

The earlier ruleset rolled several d20s and kept one of them instead of
counting successes. It survives for older call sites and is kept apart
from the pool resolver:

- Positive dice: roll that many, keep the highest (advantage).
- Zero dice: roll 2, keep the lowest.
- Negative dice: roll abs(n) + 2, keep the lowest (-1d20 = 3d20 keep lower).
- Triumph: the kept die shows its maximum face and the total beats the
  difficulty by at most 5 (or no difficulty was given).
- Disaster: a natural 1 on a single die, or more than half of the dice
  showing the same non-maximum face.

Legacy results are not history entries.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.dice.parser import format_modifier
from src.dice.roller import roll_dice, validate_modifier, validate_sides
from src.dice.types import DamageResult, RollKind


logger = logging.getLogger(__name__)

LEGACY_DIE_SIZE = 20
# Kept-die margin over the difficulty that still counts as a triumph
TRIUMPH_MARGIN = 5


class AdvantageType(str, Enum):
    """Which die a legacy roll keeps."""

    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class LegacyRollResult:
    """Result of a keep-one legacy roll.

    Attributes:
        formula: Display formula, e.g. "2d20+3" or "-1d20+0 (3d20, menor)".
        die_size: Faces per die.
        dice_count: Requested dice, which may be zero or negative.
        rolls: Every die actually rolled.
        modifier: Flat modifier.
        base_result: The kept die.
        final_result: base_result + modifier.
        advantage_type: Whether the highest or lowest die was kept.
        is_damage_roll: Damage rolls never triumph or disaster.
        context: Optional label.
        timestamp: When the roll was made.
    """

    formula: str
    die_size: int
    dice_count: int
    rolls: tuple[int, ...]
    modifier: int
    base_result: int
    final_result: int
    advantage_type: AdvantageType
    is_damage_roll: bool = False
    context: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_critical(self) -> bool:
        """Kept die shows its maximum face."""
        return self.base_result == self.die_size

    @property
    def is_critical_failure(self) -> bool:
        """Kept die shows 1."""
        return self.base_result == 1


def roll_legacy(
    number_of_dice: int,
    modifier: int = 0,
    context: str | None = None,
    die_size: int = LEGACY_DIE_SIZE,
    advantage_type: AdvantageType = AdvantageType.ADVANTAGE,
) -> LegacyRollResult:
    """Roll keep-one dice under the legacy rules.

    Args:
        number_of_dice: Attribute dice; zero or negative forces a
            keep-lowest roll with extra dice.
        modifier: Flat modifier added to the kept die.
        context: Optional label.
        die_size: Faces per die (20 under the legacy rules).
        advantage_type: For positive dice, keep the highest (ADVANTAGE) or
            lowest (DISADVANTAGE). Ignored for zero or negative dice.

    Raises:
        DiceRollError: If die_size < 2 or modifier is not an integer.

    Examples:
        >>> result = roll_legacy(0, modifier=2)
        >>> len(result.rolls), result.base_result == min(result.rolls)
        (2, True)
        >>> len(roll_legacy(-2).rolls)
        4
    """
    validate_sides(die_size)
    validate_modifier(modifier)

    if number_of_dice > 0:
        rolls = roll_dice(number_of_dice, die_size)
        if advantage_type == AdvantageType.ADVANTAGE:
            base = max(rolls)
        else:
            base = min(rolls)
        formula = f"{number_of_dice}d{die_size}{format_modifier(modifier)}"
        kept_type = advantage_type
    else:
        actual = abs(number_of_dice) + 2
        rolls = roll_dice(actual, die_size)
        base = min(rolls)
        # Forced keep-lowest rolls always show the modifier, even +0
        mod = format_modifier(modifier) or "+0"
        formula = f"{number_of_dice}d{die_size}{mod} ({actual}d{die_size}, menor)"
        kept_type = AdvantageType.DISADVANTAGE

    result = LegacyRollResult(
        formula=formula,
        die_size=die_size,
        dice_count=number_of_dice,
        rolls=rolls,
        modifier=modifier,
        base_result=base,
        final_result=base + modifier,
        advantage_type=kept_type,
        context=context,
    )
    logger.debug(f"Legacy roll {formula}: {list(rolls)} kept {base}")
    return result


def _is_damage(result: LegacyRollResult | DamageResult) -> bool:
    if getattr(result, "kind", None) == RollKind.DAMAGE:
        return True
    return getattr(result, "is_damage_roll", False)


def is_triumph(
    result: LegacyRollResult | DamageResult,
    difficulty: int | None = None,
) -> bool:
    """Check whether a legacy roll is a triumph.

    Only the kept die matters: a 20 among discarded dice of a keep-lowest
    roll is not a triumph.

    Args:
        result: The roll to classify.
        difficulty: Target number, if the roll had one.

    Examples:
        >>> r = LegacyRollResult("1d20+3", 20, 1, (20,), 3, 20, 23,
        ...                      AdvantageType.ADVANTAGE)
        >>> is_triumph(r), is_triumph(r, difficulty=20), is_triumph(r, difficulty=10)
        (True, True, False)
    """
    if _is_damage(result):
        return False
    if result.base_result != result.die_size:
        return False
    if difficulty is None:
        return True
    margin = result.final_result - difficulty
    return 0 <= margin <= TRIUMPH_MARGIN


def is_disaster(result: LegacyRollResult | DamageResult) -> bool:
    """Check whether a legacy roll is a disaster.

    A single die is a disaster on a 1. With several dice, more than half
    of them (floor(n/2) + 1) must share a face other than the maximum:
    both of 2 dice, 2 of 3, 3 of 4.
    """
    if _is_damage(result):
        return False

    rolls = result.rolls
    if not rolls:
        return False
    if len(rolls) == 1:
        return rolls[0] == 1

    top = result.die_size
    counts = Counter(value for value in rolls if value != top)
    threshold = len(rolls) // 2 + 1
    return any(count >= threshold for count in counts.values())
