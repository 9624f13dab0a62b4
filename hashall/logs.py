"""Diagnostic logging setup for the command-line tool."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOG_ENV_VAR = "HASHALL_LOG"
LOG_FORMAT = "hashall: %(levelname)s: %(message)s"

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for(verbosity: int, env_value: str | None = None) -> int:
    """Map ``-v`` count to a level; a valid ``HASHALL_LOG`` name overrides it."""
    if env_value:
        named = logging.getLevelName(env_value.strip().upper())
        if isinstance(named, int):
            return named
    index = max(0, min(verbosity, len(_VERBOSITY_LEVELS) - 1))
    return _VERBOSITY_LEVELS[index]


def configure_logging(verbosity: int = 0, stream: TextIO | None = None) -> logging.Logger:
    """Attach one stderr handler to the ``hashall`` logger tree."""
    logger = logging.getLogger("hashall")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level_for(verbosity, os.environ.get(LOG_ENV_VAR)))
    logger.propagate = False
    return logger


__all__ = ["LOG_ENV_VAR", "LOG_FORMAT", "level_for", "configure_logging"]
