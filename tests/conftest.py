"""Shared fixtures for all tests."""

import copy
import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sheetwright.database.models import Base, Character, User

SAMPLE_SHEET = {
    "basicInfo": {
        "characterName": "Ilsa Varn",
        "playerName": "Dana",
        "race": "Elf",
        "characterClass": "Ranger",
        "currentLevel": 0,
        "currentXp": 0,
        "nextLevelXp": 10,
    },
    "attributes": {
        "race": {
            "agility": 3,
            "charisma": 1,
            "courage": 2,
            "dexterity": 2,
            "dodge": 1,
            "strength": 1,
            "intelligence": 2,
            "initiative": 1,
            "intimidate": 0,
            "maneuver": 1,
            "reflexes": 2,
            "wisdom": 1,
            "vigor": 1,
            "willpower": 2,
        },
        "class": {
            "agility": 1,
            "charisma": 0,
            "courage": 1,
            "dexterity": 2,
            "dodge": 2,
            "strength": 1,
            "intelligence": 0,
            "initiative": 2,
            "intimidate": 1,
            "maneuver": 0,
            "reflexes": 1,
            "wisdom": 0,
            "vigor": 2,
            "willpower": 0,
        },
    },
    "vitality": {"raceBase": 50, "classBase": 30},
    "berkana": {"baseValue": 20},
    "weapons": {
        "weapon1": {
            "name": "Longbow",
            "percentage": 60,
            "lightDamage": 4,
            "moderateDamage": 8,
            "heavyDamage": 12,
            "severeDamage": 16,
            "criticalDamage": 24,
            "observations": "Requires both hands",
        },
        "weapon2": {
            "name": "Short sword",
            "percentage": 45,
            "lightDamage": 3,
            "moderateDamage": 6,
            "heavyDamage": 9,
            "severeDamage": 12,
            "criticalDamage": 18,
            "observations": "",
        },
        "weapon3": {
            "name": "Dagger",
            "percentage": 90,
            "lightDamage": 1,
            "moderateDamage": 2,
            "heavyDamage": 3,
            "severeDamage": 4,
            "criticalDamage": 6,
            "observations": "Can be thrown",
        },
    },
    "armor": {
        "name": "Studded leather",
        "type": "light",
        "observations": "",
        "vitalityTotal": 100,
        "vitalityCurrent": 25,
    },
}


# Set test database URL BEFORE any code can cache settings or the engine
@pytest.fixture(scope="session", autouse=True)
def use_test_database(tmp_path_factory):
    """Force every test onto a temporary database file."""
    test_db_path = tmp_path_factory.mktemp("sheetwright_test") / "test_sheetwright.db"
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

    import sheetwright.database.engine as engine_module
    from sheetwright.config import get_settings

    engine_module._engine = None
    engine_module._async_session_factory = None
    get_settings.cache_clear()

    yield

    engine_module._engine = None
    engine_module._async_session_factory = None
    get_settings.cache_clear()


@pytest.fixture
def sheet_data() -> dict:
    """A complete raw sheet document; each test gets its own copy."""
    return copy.deepcopy(SAMPLE_SHEET)


@pytest.fixture
async def db_session():
    """Create a test database session with in-memory SQLite."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user."""
    user = User(
        username="testuser",
        email="test@example.com",
        name="Test User",
        password_hash=User.hash_password("password123"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """Create a second user who owns nothing of test_user's."""
    user = User(
        username="otheruser",
        email="other@example.com",
        password_hash=User.hash_password("password456"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_character(db_session: AsyncSession, test_user, sheet_data):
    """Store a character with the sample sheet."""
    character = Character(user_id=test_user.id, name="Ilsa", data=sheet_data)
    db_session.add(character)
    await db_session.commit()
    await db_session.refresh(character)
    return character
