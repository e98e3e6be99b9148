"""Derive a calculated character sheet from a raw one.

Every call recomputes everything from its arguments. Nothing is cached and no
process-wide settings are read; policy choices arrive as parameters.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from sheetwright.engine.armor import calculate_armor
from sheetwright.engine.attributes import compute_attribute_totals
from sheetwright.engine.berkana import compute_berkana
from sheetwright.engine.policies import EnginePolicies
from sheetwright.engine.progression import compute_progression
from sheetwright.engine.vitality import compute_vitality
from sheetwright.engine.weapons import calculate_weapons
from sheetwright.sheet.loader import parse_raw_sheet
from sheetwright.sheet.models import CalculatedBlock, CalculatedCharacterSheet, RawCharacterSheet

logger = structlog.get_logger(__name__)


def calculate_character_sheet(
    sheet: RawCharacterSheet | Mapping[str, Any],
    policies: EnginePolicies | None = None,
) -> CalculatedCharacterSheet:
    """
    Calculate every derived value for a character sheet.

    Args:
        sheet: A validated raw sheet, or a mapping that will be validated first
        policies: Formula policies to apply (additive-tiers vitality and
            recomputed progression when omitted)

    Returns:
        CalculatedCharacterSheet whose ``data`` is the input sheet, unchanged

    Raises:
        StructuralError: If a mapping was given and it is not a valid sheet
    """
    if not isinstance(sheet, RawCharacterSheet):
        sheet = parse_raw_sheet(sheet)

    if policies is None:
        policies = EnginePolicies()

    info = sheet.basic_info
    level = info.current_level

    calculated = CalculatedBlock(
        vitality=compute_vitality(
            sheet.vitality.race_base,
            sheet.vitality.class_base,
            level,
            policies.vitality,
        ),
        berkana=compute_berkana(sheet.berkana.base_value, level),
        attributes=compute_attribute_totals(sheet.attributes, level),
        weapons=calculate_weapons(sheet.weapons, level),
        armor=calculate_armor(sheet.armor),
        progression=compute_progression(
            level,
            info.current_xp,
            info.next_level_xp,
            policies.progression,
        ),
    )

    logger.debug(
        "character_sheet_calculated",
        level=level,
        total_vitality=calculated.vitality.total,
        xp_for_next=calculated.progression.xp_for_next,
        vitality_policy=policies.vitality.value,
        progression_policy=policies.progression.value,
    )

    return CalculatedCharacterSheet(data=sheet, calculated=calculated)
