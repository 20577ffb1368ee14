"""Free-form dice rolls (NdY+Z), summed or kept as a list."""

import logging
from datetime import datetime

from src.dice.parser import format_modifier, parse_dice
from src.dice.roller import roll_dice, validate_count, validate_modifier, validate_sides
from src.dice.types import CustomResult


logger = logging.getLogger(__name__)


def roll_custom_dice(
    dice_type: int,
    quantity: int,
    modifier: int = 0,
    summed: bool = True,
    context: str | None = None,
    timestamp: datetime | None = None,
) -> CustomResult:
    """Roll any number of dice of any size.

    Input bounds narrower than dice_type >= 2 and quantity >= 1 (the UI
    clamps quantity to 1-99 and sizes to 2-100) are the caller's business.

    Args:
        dice_type: Faces per die (>= 2).
        quantity: Number of dice (>= 1).
        modifier: Added to the total when summed.
        summed: If False, the individual rolls are the result.
        context: Optional label, e.g. "Rolagem Livre: 3d8".
        timestamp: Override for the roll time.

    Returns:
        CustomResult. ``total`` is sum(rolls) + modifier when summed and 0
        otherwise.

    Raises:
        DiceRollError: If dice_type < 2, quantity < 1 or modifier is not
            an integer.

    Examples:
        >>> result = roll_custom_dice(20, 1, 5)
        >>> result.total - 5 == result.rolls[0]
        True
        >>> roll_custom_dice(6, 4, summed=False).total
        0
    """
    validate_sides(dice_type)
    validate_count(quantity)
    validate_modifier(modifier)

    rolls = roll_dice(quantity, dice_type)
    total = sum(rolls) + modifier if summed else 0

    result = CustomResult(
        formula=f"{quantity}d{dice_type}{format_modifier(modifier)}",
        dice_type=dice_type,
        dice_count=quantity,
        rolls=rolls,
        modifier=modifier,
        total=total,
        summed=summed,
        context=context,
        timestamp=timestamp or datetime.now(),
    )
    if summed:
        logger.debug(f"Custom roll {result.formula}: {list(rolls)} -> {total}")
    else:
        logger.debug(f"Custom roll {result.formula}: {list(rolls)} (individual)")
    return result


def roll_notation(
    notation: str,
    summed: bool = True,
    context: str | None = None,
) -> CustomResult:
    """Parse dice notation and roll it as a custom roll.

    Raises:
        DiceParseError: If notation is invalid.

    Examples:
        >>> roll_notation("3d8+2").formula
        '3d8+2'
    """
    expression = parse_dice(notation)
    return roll_custom_dice(
        expression.die_size,
        expression.num_dice,
        expression.modifier,
        summed=summed,
        context=context,
    )
