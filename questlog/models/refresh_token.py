"""Registered refresh tokens; persists across restarts and worker processes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from questlog.models.base import Base


class RefreshToken(Base):
    """
    One row per live refresh token.

    Only the SHA-256 hex digest of the token is stored, never the token itself.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_hash = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
