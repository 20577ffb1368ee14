"""Dice resolution engine.

Resolves pool, damage and custom rolls into immutable results and keeps
an in-memory history of them.

Usage:
    >>> from src.dice import roll_dice_pool, roll_damage, get_dice_history
    >>> result = roll_dice_pool(3, "d6", context="Teste de Acrobacia")
    >>> get_dice_history().add(result)
    >>> damage = roll_damage(2, 6, modifier=3)
"""

# Types
from src.dice.types import (
    CustomResult,
    DamageResult,
    DiceExpression,
    DieSize,
    HistoryEntry,
    PoolResult,
    RollKind,
    SingleDieOutcome,
    is_custom_result,
    is_damage_result,
    is_pool_result,
)

# Parser
from src.dice.parser import DiceParseError, parse_dice, parse_die_size

# Roller
from src.dice.roller import DiceRollError, roll_die, roll_dice, seed_dice

# Pool Rolls
from src.dice.pool import classify_die, roll_dice_pool, roll_pool, roll_with_penalty

# Damage
from src.dice.combat import roll_damage, roll_damage_with_critical

# Custom Rolls
from src.dice.custom import roll_custom_dice, roll_notation

# History
from src.dice.history import (
    DiceRollHistory,
    create_dice_history,
    format_roll_summary,
    get_dice_history,
)

# Legacy keep-one rolls
from src.dice.legacy import (
    AdvantageType,
    LegacyRollResult,
    is_disaster,
    is_triumph,
    roll_legacy,
)

__all__ = [
    # Types
    "CustomResult",
    "DamageResult",
    "DiceExpression",
    "DieSize",
    "HistoryEntry",
    "PoolResult",
    "RollKind",
    "SingleDieOutcome",
    "is_custom_result",
    "is_damage_result",
    "is_pool_result",
    # Parser
    "parse_dice",
    "parse_die_size",
    "DiceParseError",
    # Roller
    "DiceRollError",
    "roll_die",
    "roll_dice",
    "seed_dice",
    # Pool
    "classify_die",
    "roll_dice_pool",
    "roll_pool",
    "roll_with_penalty",
    # Damage
    "roll_damage",
    "roll_damage_with_critical",
    # Custom
    "roll_custom_dice",
    "roll_notation",
    # History
    "DiceRollHistory",
    "create_dice_history",
    "format_roll_summary",
    "get_dice_history",
    # Legacy
    "AdvantageType",
    "LegacyRollResult",
    "is_disaster",
    "is_triumph",
    "roll_legacy",
]
