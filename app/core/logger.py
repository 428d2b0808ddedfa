"""
Logger factory shared by every module.

Verbosity follows ``ENV``: ``"dev"`` logs at DEBUG, ``"prod"`` at WARNING.

Usage:
    from app.core.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from typing import Dict, Optional

_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}
_level = _ENV_LEVEL_MAP.get(os.getenv("ENV", "dev"), logging.INFO)
_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a named logger writing to stdout with the standard format."""
    resolved_level = level if level is not None else _level
    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if the logger already exists
    if not logger.handlers:
        logger.setLevel(resolved_level)

        console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_level(env: str) -> None:
    """Re-apply the level for ``env`` to every logger handed out so far."""
    global _level
    _level = _ENV_LEVEL_MAP.get(env, logging.INFO)
    for logger in _loggers.values():
        logger.setLevel(_level)
