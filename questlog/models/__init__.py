"""SQLAlchemy ORM models."""

from questlog.models.base import Base
from questlog.models.character import Character
from questlog.models.refresh_token import RefreshToken
from questlog.models.task import TASK_STATUSES, Task
from questlog.models.user import User

__all__ = ["Base", "Character", "RefreshToken", "TASK_STATUSES", "Task", "User"]
