"""Pydantic request/response schemas."""

from questlog.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
    UserUpdateRequest,
)
from questlog.schemas.character import CharacterCreate, CharacterOut, CharacterUpdate
from questlog.schemas.health import HealthResponse
from questlog.schemas.task import TaskCreate, TaskOut, TaskStatus, TaskUpdate

__all__ = [
    "CharacterCreate",
    "CharacterOut",
    "CharacterUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TaskCreate",
    "TaskOut",
    "TaskStatus",
    "TaskUpdate",
    "TokenResponse",
    "UserProfile",
    "UserUpdateRequest",
]
