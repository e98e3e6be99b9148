"""Armor condition."""

from sheetwright.engine.rounding import round_half_up
from sheetwright.sheet.models import (
    Armor,
    ArmorCondition,
    ArmorStatus,
    CalculatedArmor,
    without_fields,
)

# Below this fraction of its total vitality, armor counts as damaged
DAMAGED_THRESHOLD = 0.3


def durability_percentage(vitality_total: float, vitality_current: float) -> int:
    """Remaining armor vitality as a whole percentage; 0 when the armor has no total."""
    if vitality_total <= 0:
        return 0
    return round_half_up(vitality_current / vitality_total * 100)


def armor_status(vitality_total: float, vitality_current: float) -> ArmorStatus:
    """Classify armor, checking broken before damaged."""
    if vitality_current <= 0:
        return ArmorStatus.BROKEN
    if vitality_current < vitality_total * DAMAGED_THRESHOLD:
        return ArmorStatus.DAMAGED
    return ArmorStatus.GOOD


def classify_armor(vitality_total: float, vitality_current: float) -> ArmorCondition:
    """
    Classify a piece of armor by its remaining vitality.

    Args:
        vitality_total: Maximum armor vitality
        vitality_current: Remaining armor vitality (may be negative or above total)

    Returns:
        ArmorCondition with durability percentage and status:
        - broken: current <= 0
        - damaged: current < 30% of total
        - good: otherwise
    """
    return ArmorCondition(
        durability_percentage=durability_percentage(vitality_total, vitality_current),
        status=armor_status(vitality_total, vitality_current),
    )


def calculate_armor(armor: Armor) -> CalculatedArmor:
    """Copy the armor fields and attach the derived condition."""
    condition = classify_armor(armor.vitality_total, armor.vitality_current)
    stored = without_fields(armor.model_dump(), *ArmorCondition.model_fields)
    return CalculatedArmor.model_validate({**stored, **condition.model_dump()})
