"""Character sheet models.

The raw sheet is what the persistence layer stores and the user edits. The
calculated sheet wraps a raw sheet together with the values derived from it
and is never stored.

Python attribute names are snake_case; the camelCase aliases are the field
names used in stored JSON documents and in serialized output.
"""

import warnings
from enum import StrEnum
from typing import Any

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from sheetwright.errors import DomainWarning

logger = structlog.get_logger(__name__)

Number = int | float
NonNegativeNumber = NonNegativeInt | NonNegativeFloat

MIN_PERCENTAGE = 0
MAX_PERCENTAGE = 100


class AttributeName(StrEnum):
    """The fixed set of character attributes."""

    AGILITY = "agility"
    CHARISMA = "charisma"
    COURAGE = "courage"
    DEXTERITY = "dexterity"
    DODGE = "dodge"
    STRENGTH = "strength"
    INTELLIGENCE = "intelligence"
    INITIATIVE = "initiative"
    INTIMIDATE = "intimidate"
    MANEUVER = "maneuver"
    REFLEXES = "reflexes"
    WISDOM = "wisdom"
    VIGOR = "vigor"
    WILLPOWER = "willpower"


# Constant attribute names for easy import
ATTRIBUTE_NAMES = [attr.value for attr in AttributeName]


class WeaponSlot(StrEnum):
    """The three weapon slots on a sheet."""

    WEAPON1 = "weapon1"
    WEAPON2 = "weapon2"
    WEAPON3 = "weapon3"


class ArmorStatus(StrEnum):
    """Condition of a piece of armor."""

    GOOD = "good"
    DAMAGED = "damaged"
    BROKEN = "broken"


class SheetModel(BaseModel):
    """Base model for sheet documents: frozen, camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


def without_fields(data: dict[str, Any], *names: str) -> dict[str, Any]:
    """Drop fields from a dumped document, whether keyed by name or by camelCase alias."""
    keys = set(names) | {to_camel(name) for name in names}
    return {key: value for key, value in data.items() if key not in keys}


# ---------------------------------------------------------------------------
# Raw sheet
# ---------------------------------------------------------------------------


class BasicInfo(SheetModel):
    """Level and experience counters plus descriptive fields."""

    model_config = ConfigDict(extra="allow")

    current_level: int = Field(..., ge=0, description="Current character level")
    current_xp: NonNegativeNumber = Field(..., description="Experience accumulated in this level")
    next_level_xp: NonNegativeNumber = Field(
        ..., description="Stored XP needed for the next level (may be stale)"
    )
    character_name: str = Field(default="", description="Character name as written on the sheet")
    player_name: str = Field(default="", description="Name of the player")
    race: str = Field(default="", description="Character race")
    character_class: str = Field(default="", description="Character class")


class AttributeSet(SheetModel):
    """One value per attribute. Unknown attribute names are rejected."""

    model_config = ConfigDict(extra="forbid")

    agility: Number = 0
    charisma: Number = 0
    courage: Number = 0
    dexterity: Number = 0
    dodge: Number = 0
    strength: Number = 0
    intelligence: Number = 0
    initiative: Number = 0
    intimidate: Number = 0
    maneuver: Number = 0
    reflexes: Number = 0
    wisdom: Number = 0
    vigor: Number = 0
    willpower: Number = 0

    def get(self, name: AttributeName) -> Number:
        """Return the value stored for an attribute."""
        return getattr(self, name.value)


class AttributeSets(SheetModel):
    """Race and class contributions to every attribute."""

    race: AttributeSet = Field(default_factory=AttributeSet)
    class_: AttributeSet = Field(default_factory=AttributeSet, alias="class")


class VitalityBase(SheetModel):
    """Base vitality granted by race and class."""

    race_base: Number = Field(..., description="Vitality granted by race")
    class_base: Number = Field(..., description="Vitality granted by class")


class BerkanaBase(SheetModel):
    """Base berkana pool."""

    base_value: Number = Field(..., description="Berkana before level bonus")


class Weapon(SheetModel):
    """A weapon slot: accuracy, damage by tier, and notes."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Weapon name")
    percentage: Number = Field(..., description="Base accuracy, clamped to 0-100")
    light_damage: Number = 0
    moderate_damage: Number = 0
    heavy_damage: Number = 0
    severe_damage: Number = 0
    critical_damage: Number = 0
    observations: str = ""

    @field_validator("percentage")
    @classmethod
    def clamp_percentage(cls, value: Number) -> Number:
        """Clamp accuracy into 0-100, warning when the stored value was outside it."""
        if MIN_PERCENTAGE <= value <= MAX_PERCENTAGE:
            return value

        clamped = min(MAX_PERCENTAGE, max(MIN_PERCENTAGE, value))
        logger.warning("weapon_percentage_clamped", original=value, clamped=clamped)
        warnings.warn(
            f"Weapon percentage {value} is outside 0-100; using {clamped}",
            DomainWarning,
            stacklevel=2,
        )
        return clamped


class Weapons(SheetModel):
    """Exactly three weapon slots."""

    weapon1: Weapon
    weapon2: Weapon
    weapon3: Weapon

    def get(self, slot: WeaponSlot) -> Weapon:
        """Return the weapon in a slot."""
        return getattr(self, slot.value)


class Armor(SheetModel):
    """Armor durability plus free-text description fields."""

    model_config = ConfigDict(extra="allow")

    vitality_total: NonNegativeNumber = Field(..., description="Maximum armor vitality")
    vitality_current: Number = Field(..., description="Remaining armor vitality")
    name: str = ""
    type: str = ""
    observations: str = ""


class RawCharacterSheet(SheetModel):
    """The stored, user-edited character sheet.

    Unknown top-level keys (skills, inventory, notes...) are kept as-is so that
    a sheet survives a parse/serialize cycle.
    """

    model_config = ConfigDict(extra="allow")

    basic_info: BasicInfo
    attributes: AttributeSets
    vitality: VitalityBase
    berkana: BerkanaBase
    weapons: Weapons
    armor: Armor

    @model_validator(mode="after")
    def warn_on_negative_armor(self) -> "RawCharacterSheet":
        """Negative armor vitality is tolerated; the armor simply reads as broken."""
        if self.armor.vitality_current < 0:
            logger.warning(
                "armor_vitality_negative",
                vitality_current=self.armor.vitality_current,
            )
            warnings.warn(
                f"Armor vitalityCurrent {self.armor.vitality_current} is negative",
                DomainWarning,
                stacklevel=2,
            )
        return self

    @property
    def level(self) -> int:
        """Shortcut for the current character level."""
        return self.basic_info.current_level


# ---------------------------------------------------------------------------
# Calculated sheet
# ---------------------------------------------------------------------------


class AttributeTotals(SheetModel):
    """Per-attribute totals and the shared level bonus."""

    totals: AttributeSet
    level_bonus: int
    next_bonus_at_level: int


class VitalityLevels(SheetModel):
    """Hit-point threshold of each injury tier, least to most severe."""

    notable: Number
    injured: Number
    severely_injured: Number
    condemned: Number
    incapacitated: Number
    coma: Number


class VitalityBreakdown(SheetModel):
    """Vitality total, its inputs, and the six injury tiers."""

    total: Number
    base: Number
    multiplier: int
    levels: VitalityLevels


class BerkanaPool(SheetModel):
    """Berkana total and its components."""

    total: Number
    base: Number
    level_bonus: int


class CalculatedWeapon(Weapon):
    """A weapon slot plus its level-adjusted accuracy."""

    calculated_percentage: Number


class CalculatedWeapons(SheetModel):
    """Calculated versions of the three weapon slots."""

    weapon1: CalculatedWeapon
    weapon2: CalculatedWeapon
    weapon3: CalculatedWeapon


class ArmorCondition(SheetModel):
    """Durability percentage and status derived from armor vitality."""

    durability_percentage: int
    status: ArmorStatus


class CalculatedArmor(Armor):
    """Armor fields plus the derived condition."""

    durability_percentage: int
    status: ArmorStatus


class Progression(SheetModel):
    """Experience progression toward the next level."""

    current_level: int
    next_level: int
    xp_current: Number
    xp_for_next: Number
    xp_progress: int


class CalculatedBlock(SheetModel):
    """Every value derived from a raw sheet."""

    vitality: VitalityBreakdown
    berkana: BerkanaPool
    attributes: AttributeTotals
    weapons: CalculatedWeapons
    armor: CalculatedArmor
    progression: Progression


class CalculatedCharacterSheet(SheetModel):
    """A raw sheet, unchanged, together with its derived values."""

    data: RawCharacterSheet
    calculated: CalculatedBlock
