"""Closed set of user roles and the role allow-list check."""

from collections.abc import Iterable
from enum import Enum


class Role(str, Enum):
    """Authorization role stored on every user."""

    USER = "user"
    ADMIN = "admin"


ROLE_VALUES = frozenset(r.value for r in Role)


def is_allowed(role: Role | str | None, allowed: Iterable[Role]) -> bool:
    """
    True if role is exactly one of the allowed roles.

    No hierarchy: admin does not satisfy a user-only allow-list.
    Unknown role strings are never allowed.
    """
    if role is None:
        return False
    try:
        candidate = Role(role)
    except ValueError:
        return False
    return candidate in frozenset(allowed)
