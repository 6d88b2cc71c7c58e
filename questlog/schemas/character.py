"""Request/response schemas for player characters."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CharacterCreate(BaseModel):
    """New character; only the name is required."""

    character_name: str = Field(..., min_length=1, max_length=255)
    character_race: str = Field(default="", max_length=255)
    character_class: str = Field(default="", max_length=255)
    character_build: str = Field(default="", max_length=255)
    character_level: int = Field(default=1, ge=1, le=100)
    character_sheet: str | None = None
    character_image: str | None = Field(default=None, max_length=2048)


class CharacterUpdate(BaseModel):
    """
    Allow-list of mutable character fields.

    Unknown keys are rejected so a request body can never choose arbitrary columns.
    """

    model_config = ConfigDict(extra="forbid")

    character_name: str | None = Field(default=None, min_length=1, max_length=255)
    character_race: str | None = Field(default=None, max_length=255)
    character_class: str | None = Field(default=None, max_length=255)
    character_build: str | None = Field(default=None, max_length=255)
    character_level: int | None = Field(default=None, ge=1, le=100)
    character_sheet: str | None = None
    character_image: str | None = Field(default=None, max_length=2048)

    @field_validator(
        "character_name",
        "character_race",
        "character_class",
        "character_build",
        "character_level",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v: object) -> object:
        # character_sheet and character_image may be cleared; the rest are NOT NULL.
        if v is None:
            raise ValueError("must not be null")
        return v


class CharacterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    character_name: str
    character_race: str
    character_class: str
    character_build: str
    character_level: int
    character_sheet: str | None = None
    character_image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
