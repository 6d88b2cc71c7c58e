"""Character CRUD, scoped to the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from questlog.api.deps import get_current_user
from questlog.core.database import get_db
from questlog.schemas.auth import CurrentUser, MessageResponse
from questlog.schemas.character import CharacterCreate, CharacterOut, CharacterUpdate
from questlog.services.resources import character_service

router = APIRouter()


@router.get("", response_model=list[CharacterOut])
def list_characters(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[CharacterOut]:
    """All characters owned by the caller; empty list when there are none."""
    rows = character_service(db).list_all(current_user.id)
    return [CharacterOut.model_validate(c) for c in rows]


@router.get("/{character_id}", response_model=CharacterOut)
def get_character(
    character_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CharacterOut:
    return CharacterOut.model_validate(character_service(db).get(current_user.id, character_id))


@router.post("", response_model=CharacterOut, status_code=status.HTTP_201_CREATED)
def create_character(
    body: CharacterCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CharacterOut:
    return CharacterOut.model_validate(character_service(db).create(current_user.id, body))


@router.put("/{character_id}", response_model=CharacterOut)
def update_character(
    character_id: int,
    body: CharacterUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CharacterOut:
    """
    Update a character. Only character_* fields are accepted; any other key
    (id, user_id, created_at, ...) is rejected with 400.
    """
    row = character_service(db).update(current_user.id, character_id, body)
    return CharacterOut.model_validate(row)


@router.delete("/{character_id}", response_model=MessageResponse)
def delete_character(
    character_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    character_service(db).delete(current_user.id, character_id)
    return MessageResponse(msg="Deleted successfully.")
