"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account details; all three fields are required."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RefreshTokenRequest(BaseModel):
    """Body for /auth/token and /auth/logout. Missing token is handled by the route, not validation."""

    token: str | None = Field(default=None, description="Refresh token issued at login")


class TokenResponse(BaseModel):
    """Access/refresh token pair returned by login and token refresh."""

    auth: bool = True
    msg: str = "Logged in!"
    token_type: str = Field(default="bearer", description="Token type")
    access_token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    expires_at: datetime = Field(..., description="Absolute access token expiry (UTC)")
    refresh_token: str = Field(..., description="Refresh token for POST /auth/token")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    msg: str


class CurrentUser(BaseModel):
    """Identity resolved from a verified access token."""

    id: int


class UserProfile(BaseModel):
    """User row without the password digest."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime | None = None


class UserUpdateRequest(BaseModel):
    """Profile update; only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=128)
