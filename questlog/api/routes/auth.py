"""Registration, login, access-token refresh and logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from questlog.api.deps import get_auth_service
from questlog.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)
from questlog.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Create an account. Does not log the user in; call /auth/login afterwards."""
    auth.register(body.username, body.email, body.password)
    return MessageResponse(msg="New user created!")


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    tokens = auth.login(body.username, body.password)
    response.headers["access_token"] = tokens.access_token
    return tokens


@router.post("/token", response_model=TokenResponse)
def refresh_token(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    body: RefreshTokenRequest | None = None,
) -> TokenResponse:
    """Exchange a registered refresh token ({"token": ...}) for a new access token."""
    tokens = auth.refresh(body.token if body else None)
    response.headers["access_token"] = tokens.access_token
    return tokens


@router.post("/logout", response_model=MessageResponse)
def logout(
    auth: Annotated[AuthService, Depends(get_auth_service)],
    body: RefreshTokenRequest | None = None,
) -> MessageResponse:
    """Revoke a refresh token. Always succeeds, even for unknown tokens."""
    auth.logout(body.token if body else None)
    return MessageResponse(msg="Logout successful")
