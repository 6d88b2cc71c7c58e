"""ORM model for owner-scoped player characters."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from questlog.models.base import Base


class Character(Base):
    """
    Player character sheet.

    character_sheet holds free-form notes; character_image is a URL.
    """

    __tablename__ = "characters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    character_name = Column(String(255), nullable=False)
    character_race = Column(String(255), nullable=False, default="")
    character_class = Column(String(255), nullable=False, default="")
    character_build = Column(String(255), nullable=False, default="")
    character_level = Column(Integer, nullable=False, default=1)
    character_sheet = Column(Text, nullable=True)
    character_image = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
