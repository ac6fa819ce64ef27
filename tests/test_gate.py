"""Unit tests for musicbox.core.gate: protected-prefix table, bearer parsing, auth checks."""

import unittest

from pydantic import SecretStr

from musicbox.core.config import Settings
from musicbox.core.errors import Forbidden, Unauthenticated
from musicbox.core.gate import (
    PROTECTED_PREFIXES,
    authenticate,
    authorize_admin,
    bearer_token,
    is_protected,
)
from musicbox.core.security import create_access_token
from musicbox.schemas.auth import Identity


class TestProtectedPrefixes(unittest.TestCase):
    """is_protected matches the fixed prefix set; everything else is open by default."""

    def test_prefix_set_is_fixed(self) -> None:
        self.assertEqual(
            PROTECTED_PREFIXES,
            ("/api/tracks", "/api/event", "/api/stream/", "/api/cover/", "/api/admin/"),
        )

    def test_protected_paths(self) -> None:
        for path in (
            "/api/tracks",
            "/api/event",
            "/api/stream/abc",
            "/api/cover/abc",
            "/api/admin/upload",
        ):
            with self.subTest(path=path):
                self.assertTrue(is_protected(path))

    def test_open_paths(self) -> None:
        for path in (
            "/",
            "/api/auth/login",
            "/api/auth/register",
            "/api/auth/verify",
            "/healthz",
            "/readyz",
            "/metrics",
            "/api/unknown",
            "/api/stream",
        ):
            with self.subTest(path=path):
                self.assertFalse(is_protected(path))


class TestBearerToken(unittest.TestCase):
    def test_extracts_token(self) -> None:
        self.assertEqual(bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_rejects_other_schemes_and_blank(self) -> None:
        self.assertIsNone(bearer_token(None))
        self.assertIsNone(bearer_token(""))
        self.assertIsNone(bearer_token("Basic dXNlcjpwYXNz"))
        self.assertIsNone(bearer_token("Bearer "))


class TestAuthenticate(unittest.TestCase):
    """authenticate distinguishes a missing token from an invalid one."""

    def setUp(self) -> None:
        self.settings = Settings(JWT_SECRET=SecretStr("gate-secret"), BCRYPT_ROUNDS=4)

    def test_missing_token(self) -> None:
        with self.assertRaises(Unauthenticated) as ctx:
            authenticate(None, self.settings)
        self.assertEqual(ctx.exception.message, "Authentication required")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_invalid_token(self) -> None:
        with self.assertRaises(Unauthenticated) as ctx:
            authenticate("Bearer nonsense", self.settings)
        self.assertEqual(ctx.exception.message, "Invalid token")

    def test_valid_token(self) -> None:
        token = create_access_token(4, "dave", False, self.settings)
        identity = authenticate(f"Bearer {token}", self.settings)
        self.assertEqual(identity.id, 4)
        self.assertEqual(identity.username, "dave")


class TestAuthorizeAdmin(unittest.TestCase):
    def test_admin_passes(self) -> None:
        identity = Identity(id=1, username="admin", is_admin=True, iat=0, exp=1)
        self.assertIs(authorize_admin(identity), identity)

    def test_non_admin_forbidden(self) -> None:
        identity = Identity(id=2, username="alice", is_admin=False, iat=0, exp=1)
        with self.assertRaises(Forbidden) as ctx:
            authorize_admin(identity)
        self.assertEqual(ctx.exception.status_code, 403)


if __name__ == "__main__":
    unittest.main()
