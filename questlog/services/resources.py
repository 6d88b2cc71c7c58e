"""
Owner-scoped CRUD for tasks and characters, plus the user's own profile.

Ownership is part of every query predicate: a row belonging to another user
is indistinguishable from a missing one and raises NotFoundError.
"""

import logging
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlog.core.errors import ConflictError, NotFoundError
from questlog.core.security import hash_password, verify_password
from questlog.models import Character, Task, User
from questlog.schemas.auth import UserUpdateRequest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Task, Character)


class OwnedResourceService(Generic[ModelT]):
    """List/get/create/update/delete rows of one model on behalf of one user."""

    def __init__(self, db: Session, model: type[ModelT], label: str) -> None:
        self.db = db
        self.model = model
        self.label = label

    def list_all(self, user_id: int) -> list[ModelT]:
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def get(self, user_id: int, resource_id: int) -> ModelT:
        row = (
            self.db.query(self.model)
            .filter(self.model.id == resource_id, self.model.user_id == user_id)
            .first()
        )
        if row is None:
            raise NotFoundError(f"{self.label} {resource_id} not found.")
        return row

    def create(self, user_id: int, data: BaseModel) -> ModelT:
        row = self.model(user_id=user_id, **data.model_dump())
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        logger.info("Created %s id=%s for user id=%s", self.label.lower(), row.id, user_id)
        return row

    def update(self, user_id: int, resource_id: int, data: BaseModel) -> ModelT:
        """Apply only the fields present in data (already restricted to the allow-list schema)."""
        row = self.get(user_id, resource_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(row)
        logger.info(
            "Updated %s id=%s fields=%s",
            self.label.lower(),
            resource_id,
            sorted(changes),
        )
        return row

    def delete(self, user_id: int, resource_id: int) -> None:
        deleted = (
            self.db.query(self.model)
            .filter(self.model.id == resource_id, self.model.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if deleted != 1:
            self.db.rollback()
            raise NotFoundError(f"Unable to delete {self.label.lower()} at: {resource_id}")
        self.db.commit()
        logger.info("Deleted %s id=%s", self.label.lower(), resource_id)


def task_service(db: Session) -> OwnedResourceService[Task]:
    return OwnedResourceService(db, Task, "Task")


def character_service(db: Session) -> OwnedResourceService[Character]:
    return OwnedResourceService(db, Character, "Character")


def get_profile(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("No user found.")
    return user


def update_profile(db: Session, user_id: int, body: UserUpdateRequest) -> bool:
    """
    Update username, email and/or password. Returns False when nothing changed.

    The password is re-hashed only if it differs from the current one.
    Raises ConflictError if the new username belongs to someone else.
    """
    user = get_profile(db, user_id)
    changed = False

    if body.username is not None and body.username.strip() and body.username.strip() != user.username:
        username = body.username.strip()
        taken = db.query(User.id).filter(User.username == username, User.id != user_id).first()
        if taken is not None:
            raise ConflictError("Username is already taken.")
        user.username = username
        changed = True
    if body.email is not None and body.email.strip() and body.email.strip() != user.email:
        user.email = body.email.strip()
        changed = True
    if body.password and not verify_password(body.password, user.password_hash):
        user.password_hash = hash_password(body.password)
        changed = True

    if not changed:
        return False
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username is already taken.") from e
    logger.info("Updated profile for user id=%s", user_id)
    return True
