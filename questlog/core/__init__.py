"""Core app configuration, database, errors and security."""

from questlog.core.config import get_settings, settings
from questlog.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
