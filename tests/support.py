"""Shared helpers for API tests: app with a fresh in-memory store, users and tokens."""

import asyncio
from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from profilehub.core.roles import Role
from profilehub.core.security import create_access_token, hash_password
from profilehub.main import create_app
from profilehub.repositories import InMemoryUserRepository, get_user_repository
from profilehub.schemas.user import UserRecord


class FailingUpdateRepository(InMemoryUserRepository):
    """In-memory store whose writes fail, for exercising 500 cleanup paths."""

    async def update_fields(self, user_id: int, updates: dict[str, Any]) -> UserRecord | None:
        raise RuntimeError("store unavailable")


def make_app(
    users: InMemoryUserRepository | None = None,
) -> tuple[FastAPI, TestClient, InMemoryUserRepository]:
    """App wired to its own empty store so tests do not share users."""
    app = create_app()
    if users is None:
        users = InMemoryUserRepository()
    app.dependency_overrides[get_user_repository] = lambda: users
    return app, TestClient(app), users


def add_user(
    users: InMemoryUserRepository,
    email: str = "a@x.com",
    password: str = "secret1",
    role: Role = Role.USER,
    name: str = "A",
) -> UserRecord:
    return asyncio.run(
        users.create(name=name, email=email, password_hash=hash_password(password), role=role)
    )


def bearer(email: str, role: Role | str = Role.USER) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(email=email, role=role)}"}
