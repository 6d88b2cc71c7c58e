"""MySQL connection pool and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from questlog.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict[str, Any]:
    """Pool options for server databases; SQLite keeps SQLAlchemy's default pool."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT_SEC,
        "pool_recycle": 3600,
    }


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def init_db() -> None:
    """Create every mapped table that does not exist yet."""
    # Import models so Base.metadata contains every table.
    from questlog.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
