"""
Logging configuration for the API process and the CLI scripts.

Provides a consistent logging format on stdout.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


__all__ = ["configure_logging"]
