"""Character model: a stored raw character sheet."""

import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Character(Base, TimestampMixin):
    """A character record. ``data`` holds the raw sheet document in camelCase."""

    __tablename__ = "characters"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique character identifier",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to owning user",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Character name (1-255 characters)",
    )

    data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Raw character sheet document",
    )

    user: Mapped["User"] = relationship("User", back_populates="characters")

    def __repr__(self) -> str:
        """String representation of Character."""
        return f"<Character(id={self.id}, name='{self.name}', user_id={self.user_id})>"
