"""Unit tests for questlog.services.token_store: in-memory and SQL refresh-token registries."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from questlog.models import RefreshToken, User
from questlog.services.token_store import (
    InMemoryRefreshTokenStore,
    SqlRefreshTokenStore,
    get_token_store,
    hash_token,
)

from tests._support import make_session_factory


def _in(hours: float) -> datetime:
    return datetime.now(UTC) + timedelta(hours=hours)


class RegistryContract:
    """Behaviour shared by every RefreshTokenStore; mixed into the concrete test cases."""

    def make_store(self):
        raise NotImplementedError

    def test_registered_token_is_valid(self) -> None:
        store = self.make_store()
        store.register("tok-a", 1, _in(1))
        self.assertTrue(store.is_valid("tok-a"))
        self.assertFalse(store.is_valid("tok-b"))

    def test_revoke_removes_token(self) -> None:
        store = self.make_store()
        store.register("tok-a", 1, _in(1))
        self.assertTrue(store.revoke("tok-a"))
        self.assertFalse(store.is_valid("tok-a"))

    def test_revoke_unknown_is_noop(self) -> None:
        store = self.make_store()
        self.assertFalse(store.revoke("never-issued"))
        self.assertFalse(store.revoke("never-issued"))

    def test_expired_entry_is_not_valid(self) -> None:
        store = self.make_store()
        store.register("old", 1, _in(-1))
        self.assertFalse(store.is_valid("old"))

    def test_purge_expired_only_removes_expired(self) -> None:
        store = self.make_store()
        store.register("soon-1", 1, _in(1))
        store.register("soon-2", 1, _in(2))
        store.register("later", 1, _in(5))
        self.assertEqual(store.purge_expired(now=_in(3)), 2)
        self.assertTrue(store.is_valid("later"))
        self.assertFalse(store.is_valid("soon-1"))
        self.assertEqual(store.purge_expired(now=_in(3)), 0)


class TestInMemoryStore(RegistryContract, unittest.TestCase):
    def make_store(self) -> InMemoryRefreshTokenStore:
        return InMemoryRefreshTokenStore()

    def test_len_tracks_entries(self) -> None:
        store = self.make_store()
        store.register("a", 1, _in(1))
        store.register("b", 1, _in(1))
        self.assertEqual(len(store), 2)
        store.revoke("a")
        self.assertEqual(len(store), 1)

    def test_register_drops_expired_entries(self) -> None:
        store = self.make_store()
        store.register("stale-1", 1, _in(-2))
        store.register("stale-2", 1, _in(-1))
        store.register("fresh", 1, _in(1))
        self.assertEqual(len(store), 1)
        self.assertTrue(store.is_valid("fresh"))


class TestSqlStore(RegistryContract, unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.db.add(User(id=1, username="owner", email="o@example.com", password_hash="x"))
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def make_store(self) -> SqlRefreshTokenStore:
        return SqlRefreshTokenStore(self.db)

    def test_only_hash_is_persisted(self) -> None:
        store = self.make_store()
        store.register("raw-token-value", 1, _in(1))
        row = self.db.query(RefreshToken).one()
        self.assertEqual(row.token_hash, hash_token("raw-token-value"))
        self.assertNotIn("raw-token-value", row.token_hash)

    def test_state_survives_new_store_instance(self) -> None:
        self.make_store().register("persisted", 1, _in(1))
        self.assertTrue(SqlRefreshTokenStore(self.db).is_valid("persisted"))


class TestGetTokenStore(unittest.TestCase):
    def test_memory_setting_returns_shared_instance(self) -> None:
        settings = MagicMock()
        settings.REFRESH_TOKEN_STORE = "memory"
        first = get_token_store(MagicMock(), settings)
        second = get_token_store(MagicMock(), settings)
        self.assertIsInstance(first, InMemoryRefreshTokenStore)
        self.assertIs(first, second)

    def test_database_setting_binds_session(self) -> None:
        settings = MagicMock()
        settings.REFRESH_TOKEN_STORE = "database"
        session = MagicMock()
        store = get_token_store(session, settings)
        self.assertIsInstance(store, SqlRefreshTokenStore)
        self.assertIs(store.session, session)


if __name__ == "__main__":
    unittest.main()
