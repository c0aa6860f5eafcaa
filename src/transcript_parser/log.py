"""Logging setup for transcript-parser command-line use.

The library modules only emit records through ``logging.getLogger`` under
the ``transcript_parser`` namespace.  :func:`setup_logging` attaches the
project's pipe-separated handler to that package logger, never to the root
logger, so an application embedding the parser keeps its own configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "transcript_parser"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks handlers added by setup_logging so repeated calls stay idempotent.
_HANDLER_ATTR = "_transcript_parser_log_handler"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Configure the ``transcript_parser`` logger with the project formatter.

    Safe to call more than once; the existing handler is reused and only
    its level is updated.  Records handled here do not propagate to the
    root logger, so they are never written twice.

    Args:
        level: A standard logging level name (e.g. ``"DEBUG"``).
        stream: Where to write.  Defaults to ``sys.stderr``.

    Returns:
        The configured package logger.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    for handler in package_logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            return package_logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    setattr(handler, _HANDLER_ATTR, True)
    package_logger.addHandler(handler)
    return package_logger
