"""Authentication and authorization dependencies (get_current_user, authorize)."""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from profilehub.core.roles import Role, is_allowed
from profilehub.core.security import (
    TokenExpiredError,
    TokenInvalidError,
    decode_access_token,
)
from profilehub.repositories import UserRepository, get_user_repository
from profilehub.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

_BEARER = {"WWW-Authenticate": "Bearer"}


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Unauthenticated: {detail}",
        headers=_BEARER,
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and resolve it to the stored user.

    The role comes from the store as of this request, not from the token, so a
    role change takes effect on the next request. The identity is also attached
    to request.state.identity for authorize().
    """
    if credentials is None or not credentials.credentials:
        raise _unauthenticated("missing credential")
    try:
        claims = decode_access_token(credentials.credentials)
    except TokenExpiredError:
        raise _unauthenticated("credential expired")
    except TokenInvalidError:
        raise _unauthenticated("invalid credential")

    try:
        identity = await users.get_identity_by_email(claims.email)
    except Exception:
        logger.exception("Authentication lookup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal: authentication failure",
        )
    if identity is None:
        raise _unauthenticated("identity not found")

    request.state.identity = identity
    return identity


def authorize(*allowed_roles: Role) -> Callable[[Request], Awaitable[None]]:
    """
    Build a dependency that admits only identities whose role is in allowed_roles.

    It reads the identity attached by get_current_user, which must be listed
    before it in the route's dependencies. Exact match only; list every role you accept.
    """
    if not allowed_roles:
        raise ValueError("authorize() needs at least one role")
    allowed = frozenset(Role(r) for r in allowed_roles)

    async def check_role(request: Request) -> None:
        identity: CurrentUser | None = getattr(request.state, "identity", None)
        if identity is None or not identity.role:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized: missing identity",
            )
        if not is_allowed(identity.role, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: role not permitted",
            )

    return check_role


AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
