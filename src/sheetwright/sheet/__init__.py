"""Character sheet models and loading."""

from .loader import load_sheet_file, parse_raw_sheet, read_sheet_document
from .models import (
    ATTRIBUTE_NAMES,
    ArmorStatus,
    AttributeName,
    CalculatedCharacterSheet,
    RawCharacterSheet,
    WeaponSlot,
)

__all__ = [
    "ATTRIBUTE_NAMES",
    "ArmorStatus",
    "AttributeName",
    "CalculatedCharacterSheet",
    "RawCharacterSheet",
    "WeaponSlot",
    "load_sheet_file",
    "parse_raw_sheet",
    "read_sheet_document",
]
