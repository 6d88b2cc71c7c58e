"""Request/response schemas for tasks."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskStatus = Literal["pending", "in progress", "completed"]


class TaskCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Task name")
    status: TaskStatus = Field(default="pending", description="Task status")


class TaskUpdate(BaseModel):
    """Mutable task fields; any other key is rejected."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: TaskStatus | None = None

    @field_validator("name", "status", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        # Omit a field to leave it unchanged; null would clear a NOT NULL column.
        if v is None:
            raise ValueError("must not be null")
        return v


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
