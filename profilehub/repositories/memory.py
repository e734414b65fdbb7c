"""In-memory credential store for local development and tests."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

from profilehub.core.roles import Role
from profilehub.repositories.base import (
    EmailAlreadyExistsError,
    UserRepository,
    check_updatable,
    normalize_email,
)
from profilehub.schemas.auth import CurrentUser
from profilehub.schemas.user import Address, UserRecord


class InMemoryUserRepository(UserRepository):
    """Dict-backed store. Records are copied in and out so callers cannot mutate state."""

    def __init__(self) -> None:
        self._users: dict[int, UserRecord] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get_by_email(self, email: str) -> UserRecord | None:
        key = normalize_email(email)
        for user in self._users.values():
            if user.email == key:
                return user.model_copy(deep=True)
        return None

    async def get_identity_by_email(self, email: str) -> CurrentUser | None:
        user = await self.get_by_email(email)
        if user is None:
            return None
        return CurrentUser(id=user.id, email=user.email, role=user.role)

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user is not None else None

    async def create(
        self, *, name: str, email: str, password_hash: str, role: Role = Role.USER
    ) -> UserRecord:
        key = normalize_email(email)
        async with self._lock:
            if any(u.email == key for u in self._users.values()):
                raise EmailAlreadyExistsError(key)
            now = datetime.now(UTC)
            user = UserRecord(
                id=self._next_id,
                name=name.strip(),
                email=key,
                password_hash=password_hash,
                role=Role(role),
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._next_id += 1
        return user.model_copy(deep=True)

    async def update_fields(self, user_id: int, updates: dict[str, Any]) -> UserRecord | None:
        check_updatable(updates)
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            values = dict(updates)
            if isinstance(values.get("address"), dict):
                values["address"] = Address.model_validate(values["address"])
            values["updated_at"] = datetime.now(UTC)
            updated = user.model_copy(update=values, deep=True)
            self._users[user_id] = updated
        return updated.model_copy(deep=True)

    async def delete_by_id(self, user_id: int) -> bool:
        async with self._lock:
            return self._users.pop(user_id, None) is not None

    async def list_by_role(self, role: Role) -> list[UserRecord]:
        return [
            u.model_copy(deep=True)
            for _, u in sorted(self._users.items())
            if u.role == Role(role)
        ]

    async def set_role(self, user_id: int, role: Role) -> bool:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = user.model_copy(
                update={"role": Role(role), "updated_at": datetime.now(UTC)}
            )
        return True


__all__ = ["InMemoryUserRepository"]
