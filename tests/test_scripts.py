"""Tests for the CLI entrypoints: token sweep and create_user."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

from questlog import token_sweep
from questlog.models import User
from questlog.scripts import create_user
from questlog.services.token_store import SqlRefreshTokenStore

from tests._support import make_session_factory


class TestTokenSweep(unittest.TestCase):
    def test_memory_store_skips_database(self) -> None:
        settings = MagicMock()
        settings.REFRESH_TOKEN_STORE = "memory"
        settings.LOG_LEVEL = "INFO"
        with patch.object(token_sweep, "get_settings", return_value=settings), patch.object(
            token_sweep, "SessionLocal"
        ) as session_local:
            self.assertEqual(token_sweep.main(), 0)
        session_local.assert_not_called()

    def test_sweeps_expired_rows(self) -> None:
        factory = make_session_factory()
        db = factory()
        db.add(User(id=1, username="u", email="u@example.com", password_hash="x"))
        db.commit()
        store = SqlRefreshTokenStore(db)
        store.register("expired", 1, datetime.now(UTC) - timedelta(minutes=5))
        store.register("live", 1, datetime.now(UTC) + timedelta(minutes=5))

        settings = MagicMock()
        settings.REFRESH_TOKEN_STORE = "database"
        settings.LOG_LEVEL = "INFO"
        with patch.object(token_sweep, "get_settings", return_value=settings), patch.object(
            token_sweep, "SessionLocal", factory
        ):
            self.assertEqual(token_sweep.main(), 0)

        self.assertTrue(SqlRefreshTokenStore(db).is_valid("live"))
        self.assertEqual(SqlRefreshTokenStore(db).purge_expired(), 0)
        db.close()

    def test_failure_returns_1(self) -> None:
        settings = MagicMock()
        settings.REFRESH_TOKEN_STORE = "database"
        settings.LOG_LEVEL = "INFO"
        broken = MagicMock()
        broken.return_value.query.side_effect = RuntimeError("db down")
        with patch.object(token_sweep, "get_settings", return_value=settings), patch.object(
            token_sweep, "SessionLocal", broken
        ):
            self.assertEqual(token_sweep.main(), 1)
        broken.return_value.close.assert_called_once()


class TestCreateUser(unittest.TestCase):
    def test_creates_then_refuses_duplicate(self) -> None:
        factory = make_session_factory()
        with patch.object(create_user, "SessionLocal", factory):
            self.assertEqual(create_user.main(["gm", "gm@example.com", "pw"]), 0)
            self.assertEqual(create_user.main(["gm", "gm@example.com", "pw"]), 1)
        db = factory()
        self.assertEqual(db.query(User).filter(User.username == "gm").count(), 1)
        db.close()


if __name__ == "__main__":
    unittest.main()
