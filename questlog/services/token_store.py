"""
Refresh-token registry.

A refresh token is usable only while it is registered here and unexpired.
Two implementations share one interface: a process-local store (state is lost
on restart and not shared between workers) and a SQL-backed store on the
refresh_tokens table.
"""

import hashlib
import logging
import threading
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from questlog.core.config import Settings, get_settings
from questlog.models import RefreshToken

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def _naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC; DATETIME columns come back naive."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.replace(tzinfo=None)


def hash_token(token: str) -> str:
    """SHA-256 hex digest used as the storage key for a refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RefreshTokenStore(ABC):
    """Registry of currently valid refresh tokens."""

    @abstractmethod
    def register(self, token: str, user_id: int, expires_at: datetime) -> None:
        """Record a newly issued refresh token."""

    @abstractmethod
    def revoke(self, token: str) -> bool:
        """Remove a token. Returns False (and does nothing) when it was not registered."""

    @abstractmethod
    def is_valid(self, token: str) -> bool:
        """True if the token is registered and its expiry has not passed."""

    @abstractmethod
    def purge_expired(self, now: datetime | None = None) -> int:
        """Delete expired entries and return how many were removed."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Process-local registry. Sync handlers run in a thread pool, hence the lock.

    Expired entries are dropped on every register, so the dict is bounded by
    the number of live tokens without any external sweep.
    """

    def __init__(self) -> None:
        self._tokens: dict[str, tuple[int, datetime]] = {}
        self._lock = threading.Lock()

    def register(self, token: str, user_id: int, expires_at: datetime) -> None:
        with self._lock:
            self._drop_expired(_naive_utc(_now()))
            self._tokens[hash_token(token)] = (user_id, _naive_utc(expires_at))

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._tokens.pop(hash_token(token), None) is not None

    def is_valid(self, token: str) -> bool:
        with self._lock:
            entry = self._tokens.get(hash_token(token))
        if entry is None:
            return False
        return entry[1] > _naive_utc(_now())

    def purge_expired(self, now: datetime | None = None) -> int:
        with self._lock:
            return self._drop_expired(_naive_utc(now or _now()))

    def _drop_expired(self, cutoff: datetime) -> int:
        # Caller holds the lock.
        expired = [key for key, (_, exp) in self._tokens.items() if exp <= cutoff]
        for key in expired:
            del self._tokens[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class SqlRefreshTokenStore(RefreshTokenStore):
    """Registry persisted in the refresh_tokens table; each mutation commits."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def register(self, token: str, user_id: int, expires_at: datetime) -> None:
        self.session.add(
            RefreshToken(
                token_hash=hash_token(token),
                user_id=user_id,
                expires_at=_naive_utc(expires_at),
            )
        )
        self.session.commit()

    def revoke(self, token: str) -> bool:
        deleted = (
            self.session.query(RefreshToken)
            .filter(RefreshToken.token_hash == hash_token(token))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    def is_valid(self, token: str) -> bool:
        row = (
            self.session.query(RefreshToken.id)
            .filter(
                RefreshToken.token_hash == hash_token(token),
                RefreshToken.expires_at > _naive_utc(_now()),
            )
            .first()
        )
        return row is not None

    def purge_expired(self, now: datetime | None = None) -> int:
        cutoff = _naive_utc(now or _now())
        deleted_count = (
            self.session.query(RefreshToken)
            .filter(RefreshToken.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        if deleted_count > 0:
            logger.info(
                "Refresh token sweep: cutoff=%s, tokens_deleted=%s",
                cutoff.isoformat(),
                deleted_count,
            )
        return deleted_count


# Shared by every request in this process when REFRESH_TOKEN_STORE=memory.
_memory_store = InMemoryRefreshTokenStore()


def get_token_store(session: Session, settings: Settings | None = None) -> RefreshTokenStore:
    """Return the configured registry; the SQL store is bound to the request's session."""
    settings = settings or get_settings()
    if settings.REFRESH_TOKEN_STORE == "memory":
        return _memory_store
    return SqlRefreshTokenStore(session)
