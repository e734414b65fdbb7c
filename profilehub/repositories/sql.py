"""SQLAlchemy-backed credential store."""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from profilehub.core.roles import Role
from profilehub.models.user import User
from profilehub.repositories.base import (
    EmailAlreadyExistsError,
    UserRepository,
    check_updatable,
    normalize_email,
)
from profilehub.schemas.auth import CurrentUser
from profilehub.schemas.user import Address, UserRecord


class SqlUserRepository(UserRepository):
    """UserRepository over one AsyncSession (one per request)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_email(self, email: str) -> UserRecord | None:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user is not None else None

    async def get_identity_by_email(self, email: str) -> CurrentUser | None:
        result = await self.db.execute(
            select(User.id, User.email, User.role).where(User.email == normalize_email(email))
        )
        row = result.first()
        if row is None:
            return None
        return CurrentUser(id=row.id, email=row.email, role=row.role)

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        user = await self.db.get(User, user_id)
        return UserRecord.model_validate(user) if user is not None else None

    async def create(
        self, *, name: str, email: str, password_hash: str, role: Role = Role.USER
    ) -> UserRecord:
        user = User(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=Role(role).value,
            pdf=[],
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise EmailAlreadyExistsError(user.email) from e
        await self.db.refresh(user)
        return UserRecord.model_validate(user)

    async def update_fields(self, user_id: int, updates: dict[str, Any]) -> UserRecord | None:
        check_updatable(updates)
        values = dict(updates)
        if isinstance(values.get("address"), Address):
            values["address"] = values["address"].model_dump(exclude_none=True)
        if values:
            result = await self.db.execute(
                update(User).where(User.id == user_id).values(**values)
            )
            await self.db.commit()
            if result.rowcount == 0:
                return None
        user = await self.db.get(User, user_id, populate_existing=True)
        return UserRecord.model_validate(user) if user is not None else None

    async def delete_by_id(self, user_id: int) -> bool:
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        return result.rowcount > 0

    async def set_role(self, user_id: int, role: Role) -> bool:
        result = await self.db.execute(
            update(User).where(User.id == user_id).values(role=Role(role).value)
        )
        await self.db.commit()
        return result.rowcount > 0

    async def list_by_role(self, role: Role) -> list[UserRecord]:
        result = await self.db.execute(
            select(User).where(User.role == Role(role).value).order_by(User.id)
        )
        return [UserRecord.model_validate(u) for u in result.scalars().all()]


__all__ = ["SqlUserRepository"]
