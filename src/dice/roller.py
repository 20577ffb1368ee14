"""Core dice rolling primitive.

Every resolver draws its faces from ``roll_die``, which uses a private
``random.Random`` instance so seeding the dice never disturbs the global
``random`` module. Tests fix faces by patching
``src.dice.roller._rng.randint``.
"""

import logging
import random


logger = logging.getLogger(__name__)

_rng = random.Random()


class DiceRollError(ValueError):
    """A roll was requested with invalid parameters.

    Raised before any random value is consumed.
    """

    pass


def validate_sides(sides: int) -> None:
    """Reject dice with fewer than two faces.

    Raises:
        DiceRollError: If sides is not an integer >= 2.
    """
    if isinstance(sides, bool) or not isinstance(sides, int):
        raise DiceRollError(f"Die sides must be an integer, got {sides!r}")
    if sides < 2:
        raise DiceRollError(f"Die must have at least 2 sides, got {sides}")


def validate_count(count: int) -> None:
    """Reject non-positive dice counts.

    Raises:
        DiceRollError: If count is not an integer >= 1.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise DiceRollError(f"Dice count must be an integer, got {count!r}")
    if count < 1:
        raise DiceRollError(f"Dice count must be at least 1, got {count}")


def validate_modifier(modifier: int) -> None:
    """Reject non-integer flat modifiers.

    Raises:
        DiceRollError: If modifier is not an integer.
    """
    if isinstance(modifier, bool) or not isinstance(modifier, int):
        raise DiceRollError(f"Modifier must be an integer, got {modifier!r}")


def roll_die(sides: int) -> int:
    """Roll a single die.

    Args:
        sides: Number of faces (>= 2).

    Returns:
        A value uniformly distributed over [1, sides].

    Raises:
        DiceRollError: If sides < 2.

    Examples:
        >>> 1 <= roll_die(6) <= 6
        True
    """
    validate_sides(sides)
    return _rng.randint(1, sides)


def roll_dice(count: int, sides: int) -> tuple[int, ...]:
    """Roll several dice of the same size.

    Both arguments are validated before the first die is rolled.

    Examples:
        >>> len(roll_dice(3, 8))
        3
    """
    validate_count(count)
    validate_sides(sides)
    return tuple(roll_die(sides) for _ in range(count))


def seed_dice(seed: int | None) -> None:
    """Seed the dice generator for reproducible rolls.

    Only the dice generator is reseeded; the global ``random`` module keeps
    its state. Passing None re-seeds from system entropy.
    """
    _rng.seed(seed)
    logger.debug(f"Dice generator seeded (seed={seed})")
