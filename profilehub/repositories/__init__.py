"""Credential store backends and the request-scoped dependency that selects one."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from profilehub.core.config import settings
from profilehub.core.database import get_sessionmaker
from profilehub.repositories.base import EmailAlreadyExistsError, UserRepository
from profilehub.repositories.memory import InMemoryUserRepository
from profilehub.repositories.sql import SqlUserRepository


@lru_cache(maxsize=1)
def _memory_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


async def get_user_repository() -> AsyncGenerator[UserRepository, None]:
    """Dependency: yield the configured store (SQL session per request, or the process memory store)."""
    if settings.USER_STORE == "memory":
        yield _memory_repository()
        return
    async with get_sessionmaker()() as db:
        yield SqlUserRepository(db)


__all__ = [
    "EmailAlreadyExistsError",
    "InMemoryUserRepository",
    "SqlUserRepository",
    "UserRepository",
    "get_user_repository",
]
