"""Vitality (hit points) and injury tiers.

A character's vitality is split into six injury tiers, from "notable" down to
"coma". Two formulas exist for the tiers; see ``VitalityPolicy``.

Tier values are not clamped: a negative tier means the character is already
below zero hit points when it reaches that tier.
"""

from sheetwright.engine.policies import VitalityPolicy
from sheetwright.sheet.models import VitalityBreakdown, VitalityLevels

# Offset subtracted from base vitality for each tier under additive-tiers
TIER_OFFSETS = {
    "notable": 0,
    "injured": 20,
    "severely_injured": 40,
    "condemned": 60,
    "incapacitated": 80,
    "coma": 100,
}

# Number of equal steps the notable value is split into under stepped-fraction
TIER_FRACTION = 6


def vitality_multiplier(level: int) -> int:
    """Vitality scales with level + 1, so a level 0 character has the base value."""
    return level + 1


def additive_tier_levels(base: float, multiplier: int) -> VitalityLevels:
    """Each tier is (base - offset) * multiplier."""
    return VitalityLevels(
        **{tier: (base - offset) * multiplier for tier, offset in TIER_OFFSETS.items()}
    )


def stepped_fraction_levels(notable: float) -> VitalityLevels:
    """Each tier drops by a sixth of the notable value (floored)."""
    step = notable // TIER_FRACTION
    return VitalityLevels(
        **{tier: notable - step * k for k, tier in enumerate(TIER_OFFSETS)}
    )


def compute_vitality(
    race_base: float,
    class_base: float,
    level: int,
    policy: VitalityPolicy = VitalityPolicy.ADDITIVE_TIERS,
) -> VitalityBreakdown:
    """
    Calculate a character's vitality and injury tiers.

    Args:
        race_base: Vitality granted by race
        class_base: Vitality granted by class
        level: Current character level
        policy: Which tier formula to apply

    Returns:
        VitalityBreakdown. Under additive-tiers the total is the sum of all six
        tiers; under stepped-fraction it is the notable tier.

    Example:
        race_base=50, class_base=30, level=0, additive-tiers:
        - base 80, multiplier 1
        - tiers 80, 60, 40, 20, 0, -20
        - total 180
    """
    base = race_base + class_base
    multiplier = vitality_multiplier(level)

    if policy is VitalityPolicy.STEPPED_FRACTION:
        levels = stepped_fraction_levels(base * multiplier)
        total = levels.notable
    else:
        levels = additive_tier_levels(base, multiplier)
        total = sum(getattr(levels, tier) for tier in TIER_OFFSETS)

    return VitalityBreakdown(
        total=total,
        base=base,
        multiplier=multiplier,
        levels=levels,
    )
