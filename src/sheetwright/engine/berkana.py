"""Berkana resource pool."""

from sheetwright.sheet.models import BerkanaPool

BERKANA_PER_LEVEL = 10


def compute_berkana(base_value: float, level: int) -> BerkanaPool:
    """Berkana grows by 10 points per character level on top of its base value."""
    bonus = level * BERKANA_PER_LEVEL
    return BerkanaPool(total=base_value + bonus, base=base_value, level_bonus=bonus)
