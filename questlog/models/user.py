"""ORM model for application users."""

from sqlalchemy import Column, DateTime, Integer, String, func

from questlog.models.base import Base


class User(Base):
    """User account for JWT authentication; owns tasks and characters."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
