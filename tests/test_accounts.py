"""Unit tests for musicbox.services.accounts: store failures and credential checks."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from musicbox.core.errors import StoreError, Unauthenticated
from musicbox.services.accounts import authenticate_user, get_user


def _failing_db() -> MagicMock:
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    return db


class TestGetUser(unittest.TestCase):
    def test_returns_row_from_query(self) -> None:
        db = MagicMock()
        user = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = user
        self.assertIs(get_user(db, 7), user)

    def test_store_failure_raises_store_error(self) -> None:
        """A database failure surfaces as StoreError, not a raw SQLAlchemy exception."""
        with self.assertRaises(StoreError) as ctx:
            get_user(_failing_db(), 7)
        self.assertEqual(ctx.exception.message, "Database error")
        self.assertEqual(ctx.exception.status_code, 500)


class TestAuthenticateUser(unittest.TestCase):
    def test_missing_credentials_rejected_without_query(self) -> None:
        db = MagicMock()
        with self.assertRaises(Unauthenticated):
            authenticate_user(db, None, "x")
        db.query.assert_not_called()

    def test_store_failure_reads_as_invalid_credentials(self) -> None:
        with self.assertRaises(Unauthenticated) as ctx:
            authenticate_user(_failing_db(), "alice", "secret1")
        self.assertEqual(ctx.exception.message, "Invalid credentials")


if __name__ == "__main__":
    unittest.main()
