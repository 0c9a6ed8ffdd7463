"""
Unified logging helpers for i18nexus tools

- One package logger writing ``LEVEL: message`` lines to stderr.
- Honors the log level from the environment via "I18NEXUS_LOG_LEVEL" (e.g. "INFO", "DEBUG").
- Provides a small helper to compact JSON metadata for log lines.
"""

import json
import logging
import os
from contextlib import contextmanager
from typing import Any


LOG_LEVEL_ENV = "I18NEXUS_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s: %(message)s"


# ---------------------------
# Level helpers
# ---------------------------

def _level_from_string(level_str: str, default: int = logging.INFO) -> int:
    """Map string level to logging constant; falls back to ``default`` on unknown."""
    level = getattr(logging, str(level_str).upper(), None)
    return level if isinstance(level, int) else default


def _level_from_env(default: int = logging.WARNING) -> int:
    """Read desired log level from the environment (key: I18NEXUS_LOG_LEVEL)."""
    val = os.environ.get(LOG_LEVEL_ENV)
    return _level_from_string(val, default) if val else default


# ---------------------------
# Public logger factory
# ---------------------------

def get_tools_logger(
    name: str = "i18nexus_tools",
    *,
    default_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Create or return a stderr logger.

    The handler is attached once; child loggers (``i18nexus_tools.wrapper...``)
    propagate to it.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(h)
    # Respect env override (I18NEXUS_LOG_LEVEL: "DEBUG"/"INFO"/...)
    logger.setLevel(_level_from_env(default=default_level))
    return logger


# Singleton logger used across the package
tools_logger = get_tools_logger()


# ---------------------------
# Format utilities
# ---------------------------

def compact_json(obj: Any, limit: int = 1200) -> str:
    """Compact JSON string for logging; truncate if too long."""
    try:
        s = json.dumps(obj, ensure_ascii=False, separators=(",", ":"), default=str)
    except Exception:
        s = str(obj)
    return s if len(s) <= limit else s[:limit] + "…(truncated)"


# ---------------------------
# Temporary level override
# ---------------------------

@contextmanager
def temporarily(level: int, logger: logging.Logger = tools_logger):
    """
    Temporarily raise/lower the package logger level.

    Example:
        with temporarily(logging.DEBUG):
            # noisy section
            ...
    """
    old = logger.level
    try:
        logger.setLevel(level)
        yield logger
    finally:
        logger.setLevel(old)
