"""
Error types raised by repositories.

Repository operations never signal expected conditions (missing id,
duplicate name) with generic exceptions; they raise one of the
``RepositoryError`` subclasses below, which the HTTP layer maps to a
status code. Backend failures that don't map to a known kind are
wrapped in ``Unexpected``.
"""

from typing import Any, Optional


class RepositoryError(Exception):
    """Base exception for all repository errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFound(RepositoryError):
    """Raised when the requested todo or label does not exist."""

    def __init__(self, id: int):
        self.id = id
        super().__init__(f"Not Found Error (id: {id})", details={"id": id})


class Duplicate(RepositoryError):
    """Raised when a create would violate a uniqueness constraint."""

    def __init__(self, id: int):
        self.id = id
        super().__init__(f"Duplicate data Error (id: {id})", details={"id": id})


class Unexpected(RepositoryError):
    """Raised on backend I/O or integrity failures."""

    def __init__(self, reason: str):
        super().__init__(f"Unexpected Error: [{reason}]", details={"reason": reason})
