"""Credential store interface shared by the SQL and in-memory backends."""

from abc import ABC, abstractmethod
from typing import Any

from profilehub.core.roles import Role
from profilehub.schemas.auth import CurrentUser
from profilehub.schemas.user import UserRecord

# Columns the edit/upload paths may change. email and role are deliberately absent.
UPDATABLE_FIELDS = frozenset(
    {"name", "password_hash", "profile_pic", "cover_photo", "cover_photo_id", "pdf", "address"}
)


class EmailAlreadyExistsError(Exception):
    """Raised when creating a user whose email is already stored."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(ABC):
    """Async lookup/create/update/delete contract over stored users."""

    @abstractmethod
    async def get_by_email(self, email: str) -> UserRecord | None:
        """Return the full record (with password hash) or None."""

    @abstractmethod
    async def get_identity_by_email(self, email: str) -> CurrentUser | None:
        """Return only {id, email, role}; the password hash is never loaded."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the full record or None."""

    @abstractmethod
    async def create(
        self, *, name: str, email: str, password_hash: str, role: Role = Role.USER
    ) -> UserRecord:
        """Insert a user. Raises EmailAlreadyExistsError on duplicate email."""

    @abstractmethod
    async def update_fields(self, user_id: int, updates: dict[str, Any]) -> UserRecord | None:
        """Apply a partial update; returns the updated record or None if missing."""

    @abstractmethod
    async def delete_by_id(self, user_id: int) -> bool:
        """Delete a user; True if a row was removed."""

    @abstractmethod
    async def set_role(self, user_id: int, role: Role) -> bool:
        """Change a user's role; True if the user exists. Not exposed on the edit path."""

    @abstractmethod
    async def list_by_role(self, role: Role) -> list[UserRecord]:
        """All users with the given role, ordered by id."""


def check_updatable(updates: dict[str, Any]) -> None:
    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")


__all__ = [
    "EmailAlreadyExistsError",
    "UPDATABLE_FIELDS",
    "UserRepository",
    "check_updatable",
    "normalize_email",
]
