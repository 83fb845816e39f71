"""
Logging configuration helpers.
Every module logs through `logging.getLogger(__name__)`; this helper sets the process-wide level and format once.
"""

from __future__ import annotations

import logging

from note_api.api.api_config import get_api_config

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from the API configuration."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    config = get_api_config()
    level_name = config.log_level.upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
