"""Centralized logging configuration for the ``bucketwise`` package.

Library modules only call ``logging.getLogger(__name__)`` and never attach
handlers. The package root logger carries a ``NullHandler`` until an
entrypoint (the CLI, or a host application) calls ``configure_logging``.
"""

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "bucketwise"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def _parse_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("BUCKETWISE_LOG_LEVEL", "")
    if isinstance(level, int):
        return level
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None) if level else None
    if isinstance(numeric, int):
        return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach a single ``StreamHandler`` to the package root logger, once.

    Args:
        level: Level as int or name (``"DEBUG"``). ``None`` falls back to
            ``BUCKETWISE_LOG_LEVEL``, then ``WARNING``.
        fmt: Optional format string.
        stream: Output stream for the handler (default stderr).
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True
