"""
Auth session service: register, login, token refresh and logout.

Each attempt moves Unauthenticated -> Validating -> Authenticated | Rejected;
rejection is always an exception from questlog.core.errors, never a partial
result. Registration never logs the user in.
"""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlog.core.config import Settings
from questlog.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    MissingTokenError,
    RevokedTokenError,
    ValidationError,
)
from questlog.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from questlog.models import User
from questlog.schemas.auth import TokenResponse
from questlog.services.token_store import RefreshTokenStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Invalid username or password."
LOGGED_IN_MSG = "Logged in!"
REFRESHED_MSG = "Token refreshed!"


class AuthService:
    """Orchestrates the credential store, password hasher, token issuer and refresh registry."""

    def __init__(self, db: Session, token_store: RefreshTokenStore, settings: Settings) -> None:
        self.db = db
        self.token_store = token_store
        self.settings = settings

    def register(self, username: str | None, email: str | None, password: str | None) -> User:
        """Create a user. Raises ValidationError for missing fields, ConflictError if the username is taken."""
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required.")

        if self.db.query(User.id).filter(User.username == username).first() is not None:
            raise ConflictError("User already exists!")

        user = User(username=username, email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same username.
            self.db.rollback()
            raise ConflictError("User already exists!") from e
        self.db.refresh(user)
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return user

    def login(self, username: str | None, password: str | None) -> TokenResponse:
        """Verify credentials and issue an access/refresh token pair."""
        if not username or not password:
            raise ValidationError("Username and password are required.")

        user = self.db.query(User).filter(User.username == username).first()
        if user is None:
            # Same bcrypt cost as a real check so timing does not reveal unknown usernames.
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: unknown username=%s", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MSG)
        if not verify_password(password, user.password_hash):
            logger.info("Login failed: wrong password for username=%s", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MSG)

        refresh_token = self._issue_refresh_token(user.id)
        logger.info("Login succeeded for user id=%s", user.id)
        return self._token_response(user.id, refresh_token)

    def refresh(self, refresh_token: str | None) -> TokenResponse:
        """
        Mint a new access token from a registered refresh token.

        With REFRESH_TOKEN_ROTATION the presented token is revoked and a new
        one returned; otherwise the same refresh token comes back. Under
        rotation the revoke decides: of two concurrent requests presenting the
        same token only the one that actually removes it gets new tokens.
        """
        if not refresh_token:
            raise MissingTokenError("Access Denied. No token provided.")
        if not self.token_store.is_valid(refresh_token):
            raise RevokedTokenError("Invalid Refresh Token")

        claims = decode_refresh_token(refresh_token)
        user_id = claims["id"]

        if self.settings.REFRESH_TOKEN_ROTATION:
            if not self.token_store.revoke(refresh_token):
                logger.warning("Refresh token replayed for user id=%s", user_id)
                raise RevokedTokenError("Invalid Refresh Token")
            refresh_token = self._issue_refresh_token(user_id)
        logger.info("Access token refreshed for user id=%s", user_id)
        return self._token_response(user_id, refresh_token, msg=REFRESHED_MSG)

    def logout(self, refresh_token: str | None) -> None:
        """Revoke the refresh token. Unknown or missing tokens are not an error."""
        if refresh_token and self.token_store.revoke(refresh_token):
            logger.info("Refresh token revoked on logout")

    def _issue_refresh_token(self, user_id: int) -> str:
        token = create_refresh_token(user_id)
        expires_at = datetime.now(UTC) + timedelta(seconds=self.settings.REFRESH_TOKEN_EXPIRE_SECONDS)
        self.token_store.register(token, user_id, expires_at)
        return token

    def _token_response(self, user_id: int, refresh_token: str, msg: str = LOGGED_IN_MSG) -> TokenResponse:
        expires_in = self.settings.ACCESS_TOKEN_EXPIRE_SECONDS
        return TokenResponse(
            msg=msg,
            access_token=create_access_token(user_id),
            expires_in=expires_in,
            expires_at=datetime.now(UTC) + timedelta(seconds=expires_in),
            refresh_token=refresh_token,
        )
