"""The authenticated user's own profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from questlog.api.deps import get_current_user
from questlog.core.database import get_db
from questlog.core.errors import NotFoundError
from questlog.schemas.auth import CurrentUser, MessageResponse, UserProfile, UserUpdateRequest
from questlog.services.resources import get_profile, update_profile

router = APIRouter()


@router.get("/me", response_model=UserProfile)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    try:
        user = get_profile(db, current_user.id)
    except NotFoundError as e:
        # Token outlived its user; reported as a bad request, not a missing route.
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return UserProfile.model_validate(user)


@router.put("/me", response_model=MessageResponse)
def update_me(
    body: UserUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Change username, email and/or password. Omitted fields are left as they are."""
    try:
        changed = update_profile(db, current_user.id, body)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    if not changed:
        return MessageResponse(msg="Nothing to update...")
    return MessageResponse(msg="Updated successfully!")
