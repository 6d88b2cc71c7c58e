"""Request authentication and per-request service construction."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from questlog.core.config import get_settings
from questlog.core.database import get_db
from questlog.core.errors import InvalidTokenError
from questlog.core.security import decode_access_token
from questlog.schemas.auth import CurrentUser
from questlog.services.auth import AuthService
from questlog.services.token_store import get_token_store

NO_TOKEN_MSG = "Access Denied. No token provided."
INVALID_TOKEN_MSG = "Invalid Token"


def _extract_token(header_value: str) -> str | None:
    """Accept 'Bearer <token>' or a bare token; anything else is malformed."""
    parts = header_value.strip().split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    if len(parts) == 1 and parts[0].lower() != "bearer":
        return parts[0]
    return None


def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_token: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """
    Dependency: require a valid access token and return the caller's identity.

    Reads the Authorization header, falling back to the legacy auth-token
    header. 401 if neither is present; 403 for any verification failure
    (expired and malformed tokens are not distinguished).
    """
    header_value = authorization or auth_token
    if not header_value or not header_value.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NO_TOKEN_MSG,
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = _extract_token(header_value)
    if token is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=INVALID_TOKEN_MSG)
    try:
        claims = decode_access_token(token)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=INVALID_TOKEN_MSG)
    return CurrentUser(id=claims["id"])


def get_auth_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
    """Dependency: AuthService wired to this request's session and the configured token store."""
    settings = get_settings()
    return AuthService(db, get_token_store(db, settings), settings)
