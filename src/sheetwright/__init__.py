"""Sheetwright: character sheet storage and stat derivation."""

from sheetwright.engine import EnginePolicies, calculate_character_sheet
from sheetwright.errors import (
    CharacterNotFoundError,
    DomainWarning,
    SheetLoadError,
    SheetwrightError,
    StructuralError,
)
from sheetwright.sheet import CalculatedCharacterSheet, RawCharacterSheet, parse_raw_sheet

__version__ = "0.1.0"

__all__ = [
    "CalculatedCharacterSheet",
    "CharacterNotFoundError",
    "DomainWarning",
    "EnginePolicies",
    "RawCharacterSheet",
    "SheetLoadError",
    "SheetwrightError",
    "StructuralError",
    "calculate_character_sheet",
    "parse_raw_sheet",
]
