"""Logging setup for applications embedding ratgeom.

The library itself only installs a ``NullHandler``; call
:func:`setup_logging` to see its records.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "ratgeom"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str, None] = None,
                  log_file: Optional[str] = None,
                  fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure the ``ratgeom`` logger and return it.

    ``level`` defaults to the configured ``log_level``.  Handlers added
    by an earlier call are replaced, so calling this twice does not
    duplicate output.
    """

    if level is None:
        from ratgeom.config import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {name!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(fmt, datefmt="%H:%M:%S")

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("logging initialised at %s", logging.getLevelName(level))
    return logger


__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "setup_logging"]
