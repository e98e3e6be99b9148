"""Attribute totals and the level bonus.

Every attribute total is the race value plus the class value plus a flat level
bonus that grows by one point every five character levels.
"""

import math

from sheetwright.sheet.models import AttributeName, AttributeSet, AttributeSets, AttributeTotals

LEVELS_PER_BONUS = 5


def level_bonus(level: int) -> int:
    """Calculate the flat attribute bonus for a character level.

    Args:
        level: Current character level (0 or more)

    Returns:
        The bonus: level // 5

    Examples:
        >>> level_bonus(4)
        0
        >>> level_bonus(5)
        1
        >>> level_bonus(14)
        2
    """
    return level // LEVELS_PER_BONUS


def next_bonus_at_level(level: int) -> int:
    """Return the next level at which the attribute bonus increases.

    Examples:
        >>> next_bonus_at_level(0)
        5
        >>> next_bonus_at_level(5)
        10
    """
    return math.ceil((level + 1) / LEVELS_PER_BONUS) * LEVELS_PER_BONUS


def compute_attribute_totals(attributes: AttributeSets, level: int) -> AttributeTotals:
    """Calculate the total of every attribute for a character level.

    Args:
        attributes: Race and class attribute values
        level: Current character level

    Returns:
        AttributeTotals with one total per attribute, the level bonus, and the
        level at which the bonus next increases
    """
    bonus = level_bonus(level)

    totals = {
        name.value: attributes.race.get(name) + attributes.class_.get(name) + bonus
        for name in AttributeName
    }

    return AttributeTotals(
        totals=AttributeSet(**totals),
        level_bonus=bonus,
        next_bonus_at_level=next_bonus_at_level(level),
    )
