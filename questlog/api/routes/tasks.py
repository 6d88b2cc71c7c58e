"""Task CRUD, scoped to the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from questlog.api.deps import get_current_user
from questlog.core.database import get_db
from questlog.schemas.auth import CurrentUser, MessageResponse
from questlog.schemas.task import TaskCreate, TaskOut, TaskUpdate
from questlog.services.resources import task_service

router = APIRouter()


@router.get("", response_model=list[TaskOut])
def list_tasks(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[TaskOut]:
    """All tasks owned by the caller, newest first."""
    return [TaskOut.model_validate(t) for t in task_service(db).list_all(current_user.id)]


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    return TaskOut.model_validate(task_service(db).get(current_user.id, task_id))


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    return TaskOut.model_validate(task_service(db).create(current_user.id, body))


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    body: TaskUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    return TaskOut.model_validate(task_service(db).update(current_user.id, task_id, body))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    task_service(db).delete(current_user.id, task_id)
    return MessageResponse(msg="Deleted successfully.")
