"""Process-wide logging setup for the splitter service."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.utils.config import get_settings


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    """Configure the root logger once.

    ``force`` re-applies the configuration, which the launcher uses when the
    level is overridden on the command line.
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return

    resolved_level = (level or get_settings().log_level).upper()
    if resolved_level not in logging.getLevelNamesMapping():
        resolved_level = "INFO"

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
        stream=sys.stdout,
        force=force,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
