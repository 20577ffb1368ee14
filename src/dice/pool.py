"""Pool rolls: count successes across a pool of same-sized dice.

Each die showing 6 or more is a success, each die showing 1 cancels one
success, and the net is never negative. When the effective pool drops to
zero or below the caller falls back to a penalty roll: two dice, keep the
lower.
"""

import logging
from datetime import datetime

from src.dice.parser import parse_die_size
from src.dice.roller import DiceRollError, roll_dice, validate_count
from src.dice.types import (
    CANCELLATION_VALUE,
    SUCCESS_THRESHOLD,
    DieSize,
    PoolResult,
    SingleDieOutcome,
)


logger = logging.getLogger(__name__)

PENALTY_DICE = 2
PENALTY_SUFFIX = "(menor)"


def _resolve_die_size(die_size: DieSize | str | int) -> DieSize:
    # Parse errors surface as DiceRollError so callers catch one type
    try:
        return parse_die_size(die_size)
    except ValueError as e:
        raise DiceRollError(str(e)) from e


def classify_die(value: int, die_size: DieSize) -> SingleDieOutcome:
    """Classify a single face.

    Thresholds are the same for every die size.

    Examples:
        >>> classify_die(6, DieSize.D6).is_success
        True
        >>> classify_die(1, DieSize.D12).is_cancellation
        True
        >>> classify_die(4, DieSize.D8).is_neutral
        True
    """
    return SingleDieOutcome(
        value=value,
        die_size=die_size,
        is_success=value >= SUCCESS_THRESHOLD,
        is_cancellation=value == CANCELLATION_VALUE,
    )


def _tally(
    dice: tuple[SingleDieOutcome, ...],
) -> tuple[int, int, int]:
    successes = sum(1 for die in dice if die.is_success)
    cancellations = sum(1 for die in dice if die.is_cancellation)
    return successes, cancellations, max(0, successes - cancellations)


def roll_dice_pool(
    dice_count: int,
    die_size: DieSize | str | int,
    context: str | None = None,
    dice_modifier: int = 0,
    timestamp: datetime | None = None,
) -> PoolResult:
    """Roll a pool and count net successes.

    Args:
        dice_count: Dice in the pool, after situational modifiers (>= 1).
        die_size: Pool die size (d6, d8, d10 or d12).
        context: Optional label for display.
        dice_modifier: The +Nd/-Nd adjustment already folded into
            dice_count. Carried for display only.
        timestamp: Override for the roll time.

    Returns:
        PoolResult with each die classified.

    Raises:
        DiceRollError: If dice_count < 1 or die_size is not a pool size.

    Examples:
        >>> result = roll_dice_pool(3, "d6")
        >>> result.formula
        '3d6'
        >>> result.net_successes == max(0, result.successes - result.cancellations)
        True
    """
    size = _resolve_die_size(die_size)
    validate_count(dice_count)

    rolls = roll_dice(dice_count, size.sides)
    dice = tuple(classify_die(value, size) for value in rolls)
    successes, cancellations, net = _tally(dice)

    result = PoolResult(
        formula=f"{dice_count}{size.value}",
        die_size=size,
        dice_count=dice_count,
        dice=dice,
        rolls=rolls,
        successes=successes,
        cancellations=cancellations,
        net_successes=net,
        is_penalty_roll=False,
        dice_modifier=dice_modifier,
        context=context,
        timestamp=timestamp or datetime.now(),
    )
    logger.debug(
        f"Pool roll {result.formula}: {list(rolls)} -> "
        f"{successes} successes, {cancellations} cancellations, {net} net"
    )
    return result


def roll_with_penalty(
    die_size: DieSize | str | int,
    context: str | None = None,
    dice_modifier: int = 0,
    timestamp: datetime | None = None,
) -> PoolResult:
    """Roll two dice and keep the lower.

    Used when the effective pool is zero or negative (an attribute at 0, or
    enough -Nd modifiers to empty the pool). The kept die is evaluated with
    the normal success/cancellation thresholds.

    Args:
        die_size: Pool die size (d6, d8, d10 or d12).
        context: Optional label for display.
        dice_modifier: Informational dice adjustment, as for roll_dice_pool.
        timestamp: Override for the roll time.

    Returns:
        PoolResult with dice_count=1 and is_penalty_roll=True. ``rolls``
        holds both faces; ``dice`` holds only the kept one.

    Examples:
        >>> result = roll_with_penalty("d6")
        >>> result.formula
        '2d6 (menor)'
        >>> result.kept_values[0] == min(result.rolls)
        True
    """
    size = _resolve_die_size(die_size)

    rolls = roll_dice(PENALTY_DICE, size.sides)
    kept = classify_die(min(rolls), size)
    successes, cancellations, net = _tally((kept,))

    result = PoolResult(
        formula=f"{PENALTY_DICE}{size.value} {PENALTY_SUFFIX}",
        die_size=size,
        dice_count=1,
        dice=(kept,),
        rolls=rolls,
        successes=successes,
        cancellations=cancellations,
        net_successes=net,
        is_penalty_roll=True,
        dice_modifier=dice_modifier,
        context=context,
        timestamp=timestamp or datetime.now(),
    )
    logger.debug(
        f"Penalty roll {result.formula}: {list(rolls)} kept {kept.value} -> {net} net"
    )
    return result


def roll_pool(
    effective_count: int,
    die_size: DieSize | str | int,
    context: str | None = None,
    dice_modifier: int = 0,
    timestamp: datetime | None = None,
) -> PoolResult:
    """Roll a pool, falling back to a penalty roll when it is empty.

    Args:
        effective_count: Pool size after modifiers; may be zero or negative.
        die_size: Pool die size.
        context: Optional label for display.
        dice_modifier: Informational dice adjustment.
        timestamp: Override for the roll time.

    Examples:
        >>> roll_pool(0, "d8").is_penalty_roll
        True
        >>> roll_pool(2, "d8").is_penalty_roll
        False
    """
    if isinstance(effective_count, bool) or not isinstance(effective_count, int):
        raise DiceRollError(f"Dice count must be an integer, got {effective_count!r}")

    if effective_count <= 0:
        return roll_with_penalty(
            die_size,
            context=context,
            dice_modifier=dice_modifier,
            timestamp=timestamp,
        )
    return roll_dice_pool(
        effective_count,
        die_size,
        context=context,
        dice_modifier=dice_modifier,
        timestamp=timestamp,
    )
