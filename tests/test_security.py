"""Unit tests for profilehub.core.security and profilehub.core.roles."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from profilehub.core.config import settings
from profilehub.core.roles import Role, is_allowed
from profilehub.core.security import (
    TokenExpiredError,
    TokenInvalidError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """bcrypt hashes are salted and verify only the original password."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("wrong", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("secret1"), hash_password("secret1"))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token: closed claims, expiry, signature."""

    def test_decode_returns_email_role_and_issued_at(self) -> None:
        token = create_access_token(email="a@x.com", role=Role.USER)
        claims = decode_access_token(token)
        self.assertEqual(claims.email, "a@x.com")
        self.assertEqual(claims.role, "user")
        self.assertIsNotNone(claims.issued_at)

    def test_token_carries_expiry(self) -> None:
        token = create_access_token(email="a@x.com", role=Role.USER)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertIn("exp", payload)
        self.assertGreater(payload["exp"], payload["iat"])

    def test_expired_token_raises_expired(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        token = create_access_token(
            email="a@x.com", role=Role.USER, now=issued, expires_minutes=1
        )
        with self.assertRaises(TokenExpiredError):
            decode_access_token(token)

    def test_other_secret_raises_invalid(self) -> None:
        token = jwt.encode(
            {"email": "a@x.com", "role": "user"}, "another-secret", algorithm="HS256"
        )
        with self.assertRaises(TokenInvalidError):
            decode_access_token(token)

    def test_malformed_token_raises_invalid(self) -> None:
        with self.assertRaises(TokenInvalidError):
            decode_access_token("not.a.jwt")

    def test_missing_email_claim_raises_invalid(self) -> None:
        token = jwt.encode(
            {"role": "admin"},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(TokenInvalidError):
            decode_access_token(token)

    def test_unknown_claims_are_ignored(self) -> None:
        token = jwt.encode(
            {"email": "A@X.com", "role": "user", "is_superuser": True},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        claims = decode_access_token(token)
        self.assertEqual(claims.email, "a@x.com")
        self.assertFalse(hasattr(claims, "is_superuser"))


class TestIsAllowed(unittest.TestCase):
    """is_allowed: exact membership in a closed role set, no hierarchy."""

    def test_member_role_allowed(self) -> None:
        self.assertTrue(is_allowed(Role.ADMIN, {Role.ADMIN}))
        self.assertTrue(is_allowed("user", {Role.USER, Role.ADMIN}))

    def test_admin_does_not_satisfy_user_only(self) -> None:
        self.assertFalse(is_allowed(Role.ADMIN, {Role.USER}))

    def test_user_denied_admin_only(self) -> None:
        self.assertFalse(is_allowed(Role.USER, {Role.ADMIN}))

    def test_unknown_or_missing_role_denied(self) -> None:
        self.assertFalse(is_allowed("superuser", {Role.ADMIN, Role.USER}))
        self.assertFalse(is_allowed(None, {Role.ADMIN}))
        self.assertFalse(is_allowed("", {Role.USER}))
