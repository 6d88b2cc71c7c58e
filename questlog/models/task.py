"""ORM model for owner-scoped tasks."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from questlog.models.base import Base

TASK_STATUSES = ("pending", "in progress", "completed")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    status = Column(String(32), nullable=False, default="pending")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
