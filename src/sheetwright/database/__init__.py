"""Database layer: engine, sessions and models."""

from .engine import (
    close_db,
    get_engine,
    get_session,
    get_session_factory,
    init_db,
    session_scope,
)

__all__ = [
    "close_db",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "session_scope",
]
