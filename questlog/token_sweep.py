"""
CLI entrypoint for the refresh-token expiry sweep. Run from cron, e.g.:

  python -m questlog.token_sweep

Or hourly: 0 * * * * cd /path/to/questlog && .venv/bin/python -m questlog.token_sweep

Only the refresh_tokens table is swept. With REFRESH_TOKEN_STORE=memory the
registry lives inside the API process, which drops expired entries itself
whenever a new refresh token is registered.
"""

import logging
import sys

from questlog.core.config import get_settings
from questlog.core.database import SessionLocal
from questlog.core.logging import configure_logging
from questlog.services.token_store import SqlRefreshTokenStore

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete refresh tokens whose expiry has passed."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    if settings.REFRESH_TOKEN_STORE != "database":
        logger.info("REFRESH_TOKEN_STORE=%s; nothing persisted to sweep.", settings.REFRESH_TOKEN_STORE)
        return 0
    db = SessionLocal()
    try:
        deleted = SqlRefreshTokenStore(db).purge_expired()
        logger.info("Token sweep completed: tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
