"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from questlog.core.config import settings
from questlog.core.errors import InvalidTokenError, PasswordHashError

# Bcrypt cost (rounds); existing user digests were created with 10.
BCRYPT_ROUNDS = 10

# Only HS256 is ever accepted when decoding (no algorithm negotiation).
JWT_ALGORITHM = "HS256"

USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False for a wrong password. Raises PasswordHashError if the stored
    digest is not a valid bcrypt hash.
    """
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError) as e:
        raise PasswordHashError("Could not validate password.") from e


# Verified against when the username does not exist so both login failures cost one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("questlog-timing-dummy")


def _encode(user_id: int, secret: str, expire_seconds: int, extra: dict[str, Any] | None = None) -> str:
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    """Create a JWT access token carrying the user id, iat and exp."""
    return _encode(
        user_id,
        settings.ACCESS_TOKEN_SECRET.get_secret_value(),
        settings.ACCESS_TOKEN_EXPIRE_SECONDS,
    )


def create_refresh_token(user_id: int) -> str:
    """Create a refresh token; the random jti keeps two same-second issuances distinct."""
    return _encode(
        user_id,
        settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        settings.REFRESH_TOKEN_EXPIRE_SECONDS,
        extra={"jti": uuid.uuid4().hex},
    )


def decode_token(token: str, secret: str) -> dict[str, Any]:
    """
    Decode and validate a JWT signed with secret; return its claims.

    Raises InvalidTokenError on bad signature, non-HS256 algorithm, malformed
    token, missing claims or elapsed expiry.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat", "id"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid Token") from e
    if not isinstance(claims.get("id"), int):
        raise InvalidTokenError("Invalid Token")
    return claims


def decode_access_token(token: str) -> dict[str, Any]:
    return decode_token(token, settings.ACCESS_TOKEN_SECRET.get_secret_value())


def decode_refresh_token(token: str) -> dict[str, Any]:
    return decode_token(token, settings.REFRESH_TOKEN_SECRET.get_secret_value())


def token_expiry(claims: dict[str, Any]) -> datetime:
    """Return the exp claim of decoded claims as an aware UTC datetime."""
    return datetime.fromtimestamp(claims["exp"], tz=UTC)
