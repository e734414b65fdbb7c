"""Password hashing and JWT creation/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from profilehub.core.config import settings
from profilehub.core.roles import Role

# Validation bounds shared by request schemas and the create_user script.
NAME_MAX_LEN = 20
EMAIL_MAX_LEN = 60
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class TokenExpiredError(Exception):
    """Token signature is valid but its exp claim is in the past."""


class TokenInvalidError(Exception):
    """Token is malformed, signed with another secret, or lacks required claims."""


@dataclass(frozen=True)
class TokenClaims:
    """Closed set of claims carried by an access token."""

    email: str
    role: str | None
    issued_at: datetime | None


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(
        pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    email: str,
    role: Role | str,
    *,
    now: datetime | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a JWT access token with email, role, iat and exp."""
    issued = now or datetime.now(UTC)
    minutes = settings.JWT_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    payload: dict[str, Any] = {
        "email": email,
        "role": Role(role).value,
        "iat": issued,
        "exp": issued + timedelta(minutes=minutes),
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry, then project the payload onto TokenClaims.

    Raises TokenExpiredError for an expired token and TokenInvalidError for
    anything else that fails verification, including a missing email claim.
    Unknown claims are ignored.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except jwt.PyJWTError as e:
        raise TokenInvalidError(str(e)) from e

    email = payload.get("email")
    if not isinstance(email, str) or not email.strip():
        raise TokenInvalidError("Token payload has no email claim")
    role = payload.get("role")
    iat = payload.get("iat")
    issued_at = (
        datetime.fromtimestamp(iat, tz=UTC) if isinstance(iat, (int, float)) else None
    )
    return TokenClaims(
        email=email.strip().lower(),
        role=role if isinstance(role, str) else None,
        issued_at=issued_at,
    )
