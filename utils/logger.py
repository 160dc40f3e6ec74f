"""
utils/logger.py
---------------
Logging setup shared by every layer.

Call ``get_logger(__name__)`` at module level; the first call installs a
single stdout handler on the root logger at the level named by LOG_LEVEL.
"""

import logging
import logging.config

from config import LOG_LEVEL

# Unknown level names fall back to INFO instead of failing at import.
_LEVEL = LOG_LEVEL if isinstance(logging.getLevelName(LOG_LEVEL), int) else "INFO"

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "pipe": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "pipe",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {"level": _LEVEL, "handlers": ["stdout"]},
}

_configured = False


def configure_logging() -> None:
    """Apply LOGGING_CONFIG once per process."""
    global _configured
    if not _configured:
        logging.config.dictConfig(LOGGING_CONFIG)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(name)
