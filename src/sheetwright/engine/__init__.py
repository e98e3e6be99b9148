"""Stat derivation engine: pure calculators for the calculated character sheet."""

from .armor import classify_armor
from .attributes import compute_attribute_totals, level_bonus, next_bonus_at_level
from .berkana import compute_berkana
from .calculator import calculate_character_sheet
from .policies import EnginePolicies, ProgressionPolicy, VitalityPolicy
from .progression import compute_progression, xp_for_next_level
from .rounding import round_half_up
from .vitality import compute_vitality
from .weapons import compute_weapon_accuracy

__all__ = [
    "EnginePolicies",
    "ProgressionPolicy",
    "VitalityPolicy",
    "calculate_character_sheet",
    "classify_armor",
    "compute_attribute_totals",
    "compute_berkana",
    "compute_progression",
    "compute_vitality",
    "compute_weapon_accuracy",
    "level_bonus",
    "next_bonus_at_level",
    "round_half_up",
    "xp_for_next_level",
]
