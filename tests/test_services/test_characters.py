"""Tests for the character service."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from sheetwright.engine import EnginePolicies
from sheetwright.engine.policies import ProgressionPolicy, VitalityPolicy
from sheetwright.errors import CharacterNotFoundError, DomainWarning, StructuralError
from sheetwright.services.characters import (
    create_character,
    delete_character,
    get_calculated_character,
    get_character,
    list_characters,
    parse_with_synced_xp,
    sync_next_level_xp,
    update_character,
    validate_name,
)
from sheetwright.sheet import parse_raw_sheet


class TestSyncNextLevelXp:
    """Tests for deriving the stored XP requirement."""

    def test_sets_from_level(self, sheet_data):
        sheet_data["basicInfo"]["currentLevel"] = 6
        sheet_data["basicInfo"]["nextLevelXp"] = 1

        synced = parse_with_synced_xp(sheet_data)

        assert synced.basic_info.next_level_xp == 70

    def test_float_level_synced(self, sheet_data):
        """A level written as 4.0 is level 4 and gets the level 4 requirement."""
        sheet_data["basicInfo"]["currentLevel"] = 4.0
        sheet_data["basicInfo"]["nextLevelXp"] = 7

        synced = parse_with_synced_xp(sheet_data)

        assert synced.level == 4
        assert synced.basic_info.next_level_xp == 50

    def test_input_not_modified(self, sheet_data):
        parse_with_synced_xp(sheet_data)
        assert sheet_data["basicInfo"]["nextLevelXp"] == 10

    def test_extra_fields_kept(self, sheet_data):
        sheet_data["basicInfo"]["alignment"] = "neutral"

        synced = sync_next_level_xp(parse_raw_sheet(sheet_data))

        assert synced.basic_info.model_dump(by_alias=True)["alignment"] == "neutral"

    def test_invalid_document_rejected(self):
        with pytest.raises(StructuralError):
            parse_with_synced_xp({"armor": {}})


class TestValidateName:
    def test_accepts_normal_name(self):
        assert validate_name("Ilsa") == "Ilsa"

    def test_rejects_empty(self):
        with pytest.raises(StructuralError):
            validate_name("")

    def test_rejects_too_long(self):
        with pytest.raises(StructuralError):
            validate_name("x" * 256)


class TestCreateCharacter:
    """Tests for storing new characters."""

    async def test_create(self, db_session: AsyncSession, test_user, sheet_data):
        character = await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)

        assert isinstance(character.id, uuid.UUID)
        assert character.user_id == test_user.id
        assert character.name == "Ilsa"
        assert character.created_at is not None
        assert character.data["basicInfo"]["characterName"] == "Ilsa Varn"

    async def test_next_level_xp_derived_on_create(
        self, db_session: AsyncSession, test_user, sheet_data
    ):
        """Whatever the client sent, nextLevelXp follows the level."""
        sheet_data["basicInfo"]["currentLevel"] = 4
        sheet_data["basicInfo"]["nextLevelXp"] = 9999

        character = await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)

        assert character.data["basicInfo"]["nextLevelXp"] == 50

    async def test_float_level_synced_on_create(
        self, db_session: AsyncSession, test_user, sheet_data
    ):
        sheet_data["basicInfo"]["currentLevel"] = 4.0
        sheet_data["basicInfo"]["nextLevelXp"] = 7

        character = await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)

        assert character.data["basicInfo"]["currentLevel"] == 4
        assert character.data["basicInfo"]["nextLevelXp"] == 50

    async def test_next_level_xp_may_be_omitted(
        self, db_session: AsyncSession, test_user, sheet_data
    ):
        del sheet_data["basicInfo"]["nextLevelXp"]

        character = await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)

        assert character.data["basicInfo"]["nextLevelXp"] == 10

    async def test_stored_document_is_normalized(
        self, db_session: AsyncSession, test_user, sheet_data
    ):
        """Clamped percentages and defaulted attributes are what gets stored."""
        sheet_data["weapons"]["weapon1"]["percentage"] = 150
        del sheet_data["attributes"]["race"]["dodge"]

        with pytest.warns(DomainWarning):
            character = await create_character(
                test_user.id, "Ilsa", sheet_data, session=db_session
            )

        assert character.data["weapons"]["weapon1"]["percentage"] == 100
        assert character.data["attributes"]["race"]["dodge"] == 0

    async def test_invalid_sheet_rejected(self, db_session: AsyncSession, test_user, sheet_data):
        del sheet_data["berkana"]

        with pytest.raises(StructuralError):
            await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)

        assert await list_characters(test_user.id, session=db_session) == []


class TestReadCharacters:
    """Tests for listing and fetching."""

    async def test_list_only_own_characters(
        self, db_session: AsyncSession, test_user, other_user, sheet_data
    ):
        await create_character(test_user.id, "Mine", sheet_data, session=db_session)
        await create_character(other_user.id, "Theirs", sheet_data, session=db_session)

        characters = await list_characters(test_user.id, session=db_session)

        assert [c.name for c in characters] == ["Mine"]

    async def test_get_character(self, db_session: AsyncSession, test_user, test_character):
        character = await get_character(test_user.id, test_character.id, session=db_session)
        assert character.id == test_character.id

    async def test_get_missing_character(self, db_session: AsyncSession, test_user):
        with pytest.raises(CharacterNotFoundError):
            await get_character(test_user.id, uuid.uuid4(), session=db_session)

    async def test_get_other_users_character(
        self, db_session: AsyncSession, other_user, test_character
    ):
        """Someone else's character looks exactly like a missing one."""
        with pytest.raises(CharacterNotFoundError):
            await get_character(other_user.id, test_character.id, session=db_session)


class TestGetCalculatedCharacter:
    """Tests for the calculated read path."""

    async def test_calculated_record(self, db_session: AsyncSession, test_user, test_character):
        record = await get_calculated_character(
            test_user.id, test_character.id, session=db_session
        )

        assert record.id == test_character.id
        assert record.name == "Ilsa"
        assert record.user_id == test_user.id
        assert record.calculated.vitality.total == 180
        assert record.calculated.armor.status == "damaged"

        dumped = record.model_dump(mode="json", by_alias=True)
        assert dumped["userId"] == str(test_user.id)
        assert "createdAt" in dumped
        assert "updatedAt" in dumped
        assert dumped["data"]["basicInfo"]["characterName"] == "Ilsa Varn"

    async def test_explicit_policies(self, db_session: AsyncSession, test_user, test_character):
        record = await get_calculated_character(
            test_user.id,
            test_character.id,
            policies=EnginePolicies(
                vitality=VitalityPolicy.STEPPED_FRACTION,
                progression=ProgressionPolicy.TRUST_STORED,
            ),
            session=db_session,
        )

        assert record.calculated.vitality.total == 80
        assert record.calculated.progression.xp_for_next == 10

    async def test_not_found_for_other_user(
        self, db_session: AsyncSession, other_user, test_character
    ):
        with pytest.raises(CharacterNotFoundError):
            await get_calculated_character(other_user.id, test_character.id, session=db_session)


class TestUpdateCharacter:
    """Tests for updates and the nextLevelXp sync."""

    async def test_rename(self, db_session: AsyncSession, test_user, test_character):
        character = await update_character(
            test_user.id, test_character.id, name="Ilsa the Bold", session=db_session
        )
        assert character.name == "Ilsa the Bold"

    async def test_level_change_recomputes_next_level_xp(
        self, db_session: AsyncSession, test_user, test_character, sheet_data
    ):
        basic_info = dict(sheet_data["basicInfo"], currentLevel=9)

        character = await update_character(
            test_user.id, test_character.id, data={"basicInfo": basic_info}, session=db_session
        )

        assert character.data["basicInfo"]["currentLevel"] == 9
        assert character.data["basicInfo"]["nextLevelXp"] == 100

    async def test_float_level_change_recomputes(
        self, db_session: AsyncSession, test_user, test_character, sheet_data
    ):
        basic_info = dict(sheet_data["basicInfo"], currentLevel=2.0, nextLevelXp=999)

        character = await update_character(
            test_user.id, test_character.id, data={"basicInfo": basic_info}, session=db_session
        )

        assert character.data["basicInfo"]["nextLevelXp"] == 30

    async def test_level_change_to_zero_recomputes(
        self, db_session: AsyncSession, test_user, sheet_data
    ):
        """Dropping back to level 0 still syncs the requirement."""
        sheet_data["basicInfo"]["currentLevel"] = 3
        created = await create_character(test_user.id, "Ilsa", sheet_data, session=db_session)
        basic_info = dict(created.data["basicInfo"], currentLevel=0)

        character = await update_character(
            test_user.id, created.id, data={"basicInfo": basic_info}, session=db_session
        )

        assert character.data["basicInfo"]["nextLevelXp"] == 10

    async def test_shallow_merge_keeps_other_sections(
        self, db_session: AsyncSession, test_user, test_character
    ):
        character = await update_character(
            test_user.id,
            test_character.id,
            data={"berkana": {"baseValue": 35}, "notes": "Lost her bow"},
            session=db_session,
        )

        assert character.data["berkana"] == {"baseValue": 35}
        assert character.data["notes"] == "Lost her bow"
        assert character.data["armor"]["vitalityTotal"] == 100

    async def test_invalid_merge_rejected(
        self, db_session: AsyncSession, test_user, test_character
    ):
        with pytest.raises(StructuralError):
            await update_character(
                test_user.id,
                test_character.id,
                data={"weapons": {"weapon1": {"percentage": 50}}},
                session=db_session,
            )

    async def test_update_other_users_character(
        self, db_session: AsyncSession, other_user, test_character
    ):
        with pytest.raises(CharacterNotFoundError):
            await update_character(
                other_user.id, test_character.id, name="Stolen", session=db_session
            )


class TestDeleteCharacter:
    async def test_delete(self, db_session: AsyncSession, test_user, test_character):
        await delete_character(test_user.id, test_character.id, session=db_session)

        with pytest.raises(CharacterNotFoundError):
            await get_character(test_user.id, test_character.id, session=db_session)

    async def test_delete_other_users_character(
        self, db_session: AsyncSession, test_user, other_user, test_character
    ):
        with pytest.raises(CharacterNotFoundError):
            await delete_character(other_user.id, test_character.id, session=db_session)

        assert await get_character(test_user.id, test_character.id, session=db_session)
