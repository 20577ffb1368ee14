"""Combat dice mechanics.

Provides damage rolls: the sum of several dice plus a flat modifier.
Whether a hit is critical is decided by the caller's combat rules; the
flag is carried on the result but never derived from the dice.
"""

import logging
from dataclasses import replace
from datetime import datetime

from src.dice.parser import format_modifier
from src.dice.roller import roll_dice, validate_count, validate_modifier, validate_sides
from src.dice.types import DamageResult


logger = logging.getLogger(__name__)


def roll_damage(
    dice_count: int,
    dice_type: int,
    modifier: int = 0,
    context: str | None = None,
    is_critical: bool = False,
    timestamp: datetime | None = None,
) -> DamageResult:
    """Roll damage dice and add a flat modifier.

    Args:
        dice_count: Number of dice (>= 1).
        dice_type: Faces per die (>= 2).
        modifier: Flat bonus or penalty added to the sum.
        context: Optional label, e.g. "Espada Longa".
        is_critical: Caller's verdict that this is critical damage.
        timestamp: Override for the roll time.

    Returns:
        DamageResult where final_result == sum(rolls) + modifier.

    Raises:
        DiceRollError: If dice_count < 1, dice_type < 2 or modifier is
            not an integer.

    Examples:
        >>> result = roll_damage(2, 6, 3)
        >>> result.formula
        '2d6+3'
        >>> result.final_result - result.modifier == sum(result.rolls)
        True
    """
    validate_count(dice_count)
    validate_sides(dice_type)
    validate_modifier(modifier)

    rolls = roll_dice(dice_count, dice_type)
    base_result = sum(rolls)

    result = DamageResult(
        formula=f"{dice_count}d{dice_type}{format_modifier(modifier)}",
        dice_type=dice_type,
        dice_count=dice_count,
        rolls=rolls,
        modifier=modifier,
        base_result=base_result,
        final_result=base_result + modifier,
        is_critical=is_critical,
        context=context,
        timestamp=timestamp or datetime.now(),
    )
    logger.debug(f"Damage roll {result.formula}: {list(rolls)} -> {result.final_result}")
    return result


def roll_damage_with_critical(
    dice_count: int,
    dice_type: int,
    modifier: int = 0,
    is_critical: bool = False,
    context: str | None = None,
) -> DamageResult:
    """Roll damage, doubling the dice on a critical hit.

    On critical hit, the dice are doubled (not the modifier). The caller
    decides whether the hit is critical.

    Examples:
        >>> result = roll_damage_with_critical(2, 6, 3, is_critical=True)
        >>> len(result.rolls)
        4
        >>> result.formula
        '2d6 × 2 (crítico)+3'
    """
    validate_count(dice_count)
    validate_modifier(modifier)

    if not is_critical:
        return roll_damage(dice_count, dice_type, modifier, context=context)

    result = roll_damage(
        dice_count * 2, dice_type, modifier, context=context, is_critical=True
    )
    formula = f"{dice_count}d{dice_type} × 2 (crítico){format_modifier(modifier)}"
    return replace(result, formula=formula)
