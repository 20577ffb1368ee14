"""Dice notation parser.

Parses standard dice notation like 1d20, 2d6+3, d100, 4d6-2, and the
die-size labels used by pool rolls (d6, d8, d10, d12).
"""

import re

from src.dice.types import DiceExpression, DieSize


class DiceParseError(ValueError):
    """Error parsing dice notation."""

    pass


# Pattern: optional count, 'd', die size, optional modifier
# Examples: 1d20, 2d6+3, d100, 4d6-2, 1d20 + 5
DICE_PATTERN = re.compile(
    r"^\s*(\d*)d(\d+)\s*([+-]\s*\d+)?\s*$",
    re.IGNORECASE,
)


def parse_dice(notation: str) -> DiceExpression:
    """Parse dice notation into a DiceExpression.

    Args:
        notation: Dice notation string (e.g., "2d6+3", "1d20", "d100").

    Returns:
        DiceExpression with parsed values.

    Raises:
        DiceParseError: If notation is invalid.

    Examples:
        >>> parse_dice("1d20")
        DiceExpression(num_dice=1, die_size=20, modifier=0)
        >>> parse_dice("2d6+3")
        DiceExpression(num_dice=2, die_size=6, modifier=3)
        >>> parse_dice("d100")
        DiceExpression(num_dice=1, die_size=100, modifier=0)
    """
    if not notation or not notation.strip():
        raise DiceParseError("Dice notation cannot be empty")

    match = DICE_PATTERN.match(notation)
    if not match:
        raise DiceParseError(f"Invalid dice notation: '{notation}'")

    num_dice_str, die_size_str, modifier_str = match.groups()

    # "d20" means "1d20"
    num_dice = int(num_dice_str) if num_dice_str else 1
    die_size = int(die_size_str)

    modifier = 0
    if modifier_str:
        modifier = int(modifier_str.replace(" ", ""))

    if num_dice < 1:
        raise DiceParseError(f"Number of dice must be at least 1, got {num_dice}")
    if die_size < 2:
        raise DiceParseError(f"Die size must be at least 2, got {die_size}")

    return DiceExpression(num_dice=num_dice, die_size=die_size, modifier=modifier)


def parse_die_size(value: DieSize | str | int) -> DieSize:
    """Normalize a pool die size.

    Accepts the enum itself, its label ("d6", "D8") or a face count (10).

    Raises:
        DiceParseError: If the value is not one of the pool die sizes.

    Examples:
        >>> parse_die_size("d6")
        <DieSize.D6: 'd6'>
        >>> parse_die_size(12)
        <DieSize.D12: 'd12'>
    """
    if isinstance(value, DieSize):
        return value

    # bool is an int subclass; True must not become a d1
    if isinstance(value, int) and not isinstance(value, bool):
        label = f"d{value}"
    elif isinstance(value, str):
        label = value.strip().lower()
    else:
        raise DiceParseError(f"Invalid pool die size: {value!r}")

    try:
        return DieSize(label)
    except ValueError:
        valid = ", ".join(size.value for size in DieSize)
        raise DiceParseError(
            f"Invalid pool die size: {value!r} (expected one of {valid})"
        ) from None


def format_modifier(modifier: int) -> str:
    """Format a modifier for a formula, omitting zero.

    Examples:
        >>> format_modifier(3)
        '+3'
        >>> format_modifier(-2)
        '-2'
        >>> format_modifier(0)
        ''
    """
    if modifier > 0:
        return f"+{modifier}"
    if modifier < 0:
        return str(modifier)
    return ""
