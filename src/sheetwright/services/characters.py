"""Character storage operations scoped to the owning user.

This is the write path that keeps the stored ``basicInfo.nextLevelXp`` in step
with the character level, and the read path that feeds stored sheets to the
derivation engine.
"""

import copy
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import select

from sheetwright.config import get_settings
from sheetwright.database.engine import session_scope
from sheetwright.database.models import Character
from sheetwright.engine import EnginePolicies, calculate_character_sheet, xp_for_next_level
from sheetwright.errors import CharacterNotFoundError, StructuralError
from sheetwright.sheet import CalculatedCharacterSheet, RawCharacterSheet, parse_raw_sheet

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)

MAX_NAME_LENGTH = 255


class CalculatedCharacterRecord(CalculatedCharacterSheet):
    """A calculated sheet together with the stored record's identity and timestamps."""

    id: uuid.UUID
    name: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


def validate_name(name: str) -> str:
    """
    Check a character name.

    Raises:
        StructuralError: If the name is empty or longer than 255 characters
    """
    if not 1 <= len(name) <= MAX_NAME_LENGTH:
        message = f"Character name must be 1-{MAX_NAME_LENGTH} characters"
        raise StructuralError(message, [("name", message)])
    return name


def sync_next_level_xp(sheet: RawCharacterSheet) -> RawCharacterSheet:
    """Return a copy of a validated sheet with nextLevelXp derived from its level."""
    basic_info = sheet.basic_info.model_copy(
        update={"next_level_xp": xp_for_next_level(sheet.level + 1)}
    )
    return sheet.model_copy(update={"basic_info": basic_info})


def parse_with_synced_xp(data: dict[str, Any]) -> RawCharacterSheet:
    """
    Validate a sheet document for writing and derive its nextLevelXp.

    The stored nextLevelXp is overwritten, so the document may omit it.

    Raises:
        StructuralError: If the document is not a valid sheet
    """
    document = copy.deepcopy(data)
    basic_info = document.get("basicInfo")
    if isinstance(basic_info, dict):
        basic_info.setdefault("nextLevelXp", 0)
    return sync_next_level_xp(parse_raw_sheet(document))


def to_document(sheet: RawCharacterSheet) -> dict[str, Any]:
    """Serialize a validated sheet for the JSON column."""
    return sheet.model_dump(mode="json", by_alias=True)


async def _fetch_owned(
    session: "AsyncSession", user_id: uuid.UUID, character_id: uuid.UUID
) -> Character:
    result = await session.execute(
        select(Character).where(Character.id == character_id, Character.user_id == user_id)
    )
    character = result.scalar_one_or_none()

    if character is None:
        raise CharacterNotFoundError(f"Character {character_id} not found")

    return character


async def list_characters(
    user_id: uuid.UUID, session: "AsyncSession | None" = None
) -> list[Character]:
    """List a user's characters, least recently updated first."""
    async with session_scope(session) as s:
        result = await s.execute(
            select(Character).where(Character.user_id == user_id).order_by(Character.updated_at)
        )
        characters = list(result.scalars().all())

    logger.info("characters_listed", user_id=str(user_id), count=len(characters))
    return characters


async def get_character(
    user_id: uuid.UUID,
    character_id: uuid.UUID,
    session: "AsyncSession | None" = None,
) -> Character:
    """
    Fetch one of a user's characters.

    Raises:
        CharacterNotFoundError: If the character does not exist or belongs to
            another user
    """
    async with session_scope(session) as s:
        character = await _fetch_owned(s, user_id, character_id)

    logger.info(
        "character_retrieved",
        user_id=str(user_id),
        character_id=str(character_id),
        name=character.name,
    )
    return character


async def get_calculated_character(
    user_id: uuid.UUID,
    character_id: uuid.UUID,
    policies: EnginePolicies | None = None,
    session: "AsyncSession | None" = None,
) -> CalculatedCharacterRecord:
    """
    Fetch a character and derive its calculated sheet.

    Args:
        user_id: Owner of the character
        character_id: Character to calculate
        policies: Formula policies; the configured ones when omitted
        session: Optional existing database session

    Raises:
        CharacterNotFoundError: If the character is not the user's
        StructuralError: If the stored document is not a valid sheet
    """
    if policies is None:
        policies = get_settings().engine_policies()

    character = await get_character(user_id, character_id, session=session)
    calculated = calculate_character_sheet(character.data, policies)

    logger.info(
        "calculated_character_retrieved",
        user_id=str(user_id),
        character_id=str(character_id),
        level=calculated.data.level,
        total_vitality=calculated.calculated.vitality.total,
        xp_for_next=calculated.calculated.progression.xp_for_next,
    )

    return CalculatedCharacterRecord(
        id=character.id,
        name=character.name,
        user_id=character.user_id,
        created_at=character.created_at,
        updated_at=character.updated_at,
        data=calculated.data,
        calculated=calculated.calculated,
    )


async def create_character(
    user_id: uuid.UUID,
    name: str,
    data: dict[str, Any],
    session: "AsyncSession | None" = None,
) -> Character:
    """
    Store a new character.

    The stored nextLevelXp is always derived from the level, whatever the
    document says.

    Raises:
        StructuralError: If the name or the sheet document is invalid
    """
    validate_name(name)
    sheet = parse_with_synced_xp(data)

    async with session_scope(session) as s:
        character = Character(user_id=user_id, name=name, data=to_document(sheet))
        s.add(character)
        await s.flush()
        await s.refresh(character)

    logger.info(
        "character_created",
        user_id=str(user_id),
        character_id=str(character.id),
        character_name=sheet.basic_info.character_name,
    )
    return character


async def update_character(
    user_id: uuid.UUID,
    character_id: uuid.UUID,
    name: str | None = None,
    data: dict[str, Any] | None = None,
    session: "AsyncSession | None" = None,
) -> Character:
    """
    Update a character's name and/or sheet.

    Top-level keys of ``data`` replace the stored ones (a shallow merge). When
    the update carries basicInfo.currentLevel, nextLevelXp is recomputed in the
    same write. The merged document must be a valid sheet.

    Raises:
        CharacterNotFoundError: If the character is not the user's
        StructuralError: If the name or the merged document is invalid
    """
    if name is not None:
        validate_name(name)

    async with session_scope(session) as s:
        character = await _fetch_owned(s, user_id, character_id)

        if name is not None:
            character.name = name

        if data is not None:
            merged = {**character.data, **data}
            basic_info = data.get("basicInfo")
            if isinstance(basic_info, dict) and "currentLevel" in basic_info:
                sheet = parse_with_synced_xp(merged)
            else:
                sheet = parse_raw_sheet(merged)
            character.data = to_document(sheet)

        await s.flush()
        await s.refresh(character)

    logger.info("character_updated", user_id=str(user_id), character_id=str(character_id))
    return character


async def delete_character(
    user_id: uuid.UUID,
    character_id: uuid.UUID,
    session: "AsyncSession | None" = None,
) -> None:
    """
    Delete one of a user's characters.

    Raises:
        CharacterNotFoundError: If the character is not the user's
    """
    async with session_scope(session) as s:
        character = await _fetch_owned(s, user_id, character_id)
        await s.delete(character)
        await s.flush()

    logger.info("character_deleted", user_id=str(user_id), character_id=str(character_id))
