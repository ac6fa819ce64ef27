"""Unit tests for musicbox.core.security: password hashing and token issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from musicbox.core.config import Settings
from musicbox.core.security import (
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


def _settings(**overrides: object) -> Settings:
    values = {"JWT_SECRET": SecretStr("unit-test-secret"), "BCRYPT_ROUNDS": 4}
    values.update(overrides)
    return Settings(**values)


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password round trip and failure modes."""

    def test_correct_password_verifies(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(verify_password("secret1", hashed))

    def test_wrong_password_rejected(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        self.assertFalse(verify_password("secret2", hashed))

    def test_malformed_hash_rejected(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestTokenIssueAndVerify(unittest.TestCase):
    """create_access_token embeds identity claims that verify_access_token returns."""

    def setUp(self) -> None:
        self.settings = _settings()

    def test_claims_round_trip(self) -> None:
        token = create_access_token(7, "alice", False, self.settings)
        identity = verify_access_token(token, self.settings)
        self.assertIsNotNone(identity)
        self.assertEqual(identity.id, 7)
        self.assertEqual(identity.username, "alice")
        self.assertFalse(identity.is_admin)

    def test_admin_flag_preserved(self) -> None:
        token = create_access_token(1, "admin", True, self.settings)
        identity = verify_access_token(token, self.settings)
        self.assertTrue(identity.is_admin)

    def test_expiry_is_24_hours_after_issue(self) -> None:
        token = create_access_token(1, "alice", False, self.settings)
        identity = verify_access_token(token, self.settings)
        self.assertEqual(identity.exp - identity.iat, 24 * 3600)

    def test_verification_is_idempotent(self) -> None:
        token = create_access_token(3, "bob", True, self.settings)
        first = verify_access_token(token, self.settings)
        second = verify_access_token(token, self.settings)
        self.assertEqual(first, second)

    def test_existing_client_claims_present(self) -> None:
        token = create_access_token(5, "carol", False, self.settings)
        payload = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])
        self.assertEqual(payload["id"], 5)
        self.assertEqual(payload["sub"], "5")
        self.assertEqual(payload["username"], "carol")
        self.assertIs(payload["is_admin"], False)


class TestTokenRejection(unittest.TestCase):
    """verify_access_token fails closed."""

    def setUp(self) -> None:
        self.settings = _settings()

    def test_token_older_than_24_hours_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=24, seconds=5)
        token = create_access_token(1, "alice", True, self.settings, issued_at=issued)
        self.assertIsNone(verify_access_token(token, self.settings))

    def test_token_just_inside_lifetime_accepted(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=23, minutes=59)
        token = create_access_token(1, "alice", False, self.settings, issued_at=issued)
        self.assertIsNotNone(verify_access_token(token, self.settings))

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(1, "alice", False, self.settings)
        other = _settings(JWT_SECRET=SecretStr("another-secret"))
        self.assertIsNone(verify_access_token(token, other))

    def test_tampered_payload_rejected(self) -> None:
        token = create_access_token(1, "alice", False, self.settings)
        header, _, signature = token.split(".")
        forged = jwt.encode(
            {"id": 1, "username": "alice", "is_admin": True, "iat": 0, "exp": 9999999999},
            "guessed-secret",
            algorithm="HS256",
        ).split(".")[1]
        self.assertIsNone(
            verify_access_token(f"{header}.{forged}.{signature}", self.settings)
        )

    def test_garbage_and_empty_rejected(self) -> None:
        self.assertIsNone(verify_access_token("not.a.token", self.settings))
        self.assertIsNone(verify_access_token("", self.settings))
        self.assertIsNone(verify_access_token(None, self.settings))

    def test_missing_identity_claims_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(hours=1)},
            "unit-test-secret",
            algorithm="HS256",
        )
        self.assertIsNone(verify_access_token(token, self.settings))

    def test_missing_expiry_rejected(self) -> None:
        token = jwt.encode(
            {"id": 1, "username": "alice", "is_admin": False, "iat": datetime.now(UTC)},
            "unit-test-secret",
            algorithm="HS256",
        )
        self.assertIsNone(verify_access_token(token, self.settings))

    def test_unsigned_token_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "id": 1,
                "username": "alice",
                "is_admin": True,
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            None,
            algorithm="none",
        )
        self.assertIsNone(verify_access_token(token, self.settings))


if __name__ == "__main__":
    unittest.main()
