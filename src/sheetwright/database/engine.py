"""Async SQLAlchemy engine and session management for Sheetwright."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sheetwright.config import get_settings

from .models.base import Base

logger = structlog.get_logger(__name__)

# Lazily created on first use
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get or create the async engine for the configured database URL.

    For SQLite files the parent directory is created if missing.
    """
    global _engine

    if _engine is None:
        settings = get_settings()

        if settings.database_url.startswith("sqlite") and ":memory:" not in settings.database_url:
            db_path = settings.database_url.split("///")[-1]
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        _engine = create_async_engine(settings.database_url, echo=settings.debug)
        logger.info("database_engine_created", url=_engine.url.render_as_string())

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory bound to the engine."""
    global _async_session_factory

    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )

    return _async_session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session that commits on success and rolls back on error.

    Example:
        async with get_session() as session:
            character = await session.get(Character, character_id)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def session_scope(session: AsyncSession | None = None) -> AsyncGenerator[AsyncSession, None]:
    """
    Use the caller's session if one is given, otherwise open a new one.

    A caller-provided session is neither committed nor closed here; the caller
    owns its transaction.
    """
    if session is not None:
        yield session
        return

    async with get_session() as new_session:
        yield new_session


async def init_db() -> None:
    """Create all tables. Call once at startup."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()

    _engine = None
    _async_session_factory = None
