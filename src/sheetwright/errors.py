"""Exception and warning types raised by Sheetwright."""

from typing import Any

from pydantic import ValidationError


class SheetwrightError(Exception):
    """Base class for all Sheetwright errors."""

    pass


class StructuralError(SheetwrightError):
    """Raised when a character sheet does not have the required shape.

    Attributes:
        errors: List of ``(location, message)`` pairs, where location is a
            dotted path such as ``"weapons.weapon2.percentage"``
    """

    def __init__(self, message: str, errors: list[tuple[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "StructuralError":
        """Build a StructuralError from a pydantic ValidationError."""
        errors = [(_format_location(err["loc"]), err["msg"]) for err in exc.errors()]
        summary = "; ".join(f"{loc}: {msg}" if loc else msg for loc, msg in errors)
        return cls(f"Invalid character sheet: {summary}", errors)


class SheetLoadError(SheetwrightError):
    """Raised when a character sheet file cannot be read or parsed."""

    pass


class CharacterNotFoundError(SheetwrightError):
    """Raised when a character does not exist or belongs to another user."""

    pass


class DomainWarning(UserWarning):
    """Issued when an out-of-range sheet value is normalized instead of rejected."""

    pass


def _format_location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)
