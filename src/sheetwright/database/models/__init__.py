"""SQLAlchemy models for Sheetwright."""

from sheetwright.database.models.base import Base, TimestampMixin
from sheetwright.database.models.character import Character
from sheetwright.database.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "Character",
    "User",
]
