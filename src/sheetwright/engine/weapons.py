"""Weapon accuracy."""

from sheetwright.sheet.models import (
    MAX_PERCENTAGE,
    MIN_PERCENTAGE,
    CalculatedWeapon,
    CalculatedWeapons,
    Weapon,
    Weapons,
    WeaponSlot,
    without_fields,
)


def compute_weapon_accuracy(base_percentage: float, level: int) -> float:
    """Add one accuracy point per level, capped at 100%.

    Examples:
        >>> compute_weapon_accuracy(40, 3)
        43
        >>> compute_weapon_accuracy(90, 15)
        100
    """
    return max(MIN_PERCENTAGE, min(MAX_PERCENTAGE, base_percentage + level))


def calculate_weapon(weapon: Weapon, level: int) -> CalculatedWeapon:
    """Copy a weapon slot and attach its calculated accuracy."""
    return CalculatedWeapon.model_validate(
        {
            **without_fields(weapon.model_dump(), "calculated_percentage"),
            "calculated_percentage": compute_weapon_accuracy(weapon.percentage, level),
        }
    )


def calculate_weapons(weapons: Weapons, level: int) -> CalculatedWeapons:
    """Calculate accuracy for all three weapon slots independently."""
    return CalculatedWeapons(
        **{slot.value: calculate_weapon(weapons.get(slot), level) for slot in WeaponSlot}
    )
