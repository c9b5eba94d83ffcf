"""
Logging for gitversioning.

All loggers live under the ``gitversioning`` namespace. Build tools
embed the resolver as a library, so nothing is printed until
:func:`setup_logging` installs a handler; the CLI does so with the level
derived from ``-v`` flags:

=========  =========  ==========================================
``-v``     Level      Format
=========  =========  ==========================================
(none)     WARNING    ``WARNING: message``
``-v``     INFO       ``INFO: message``
``-vv``    DEBUG      timestamp, logger name, level and message
=========  =========  ==========================================
"""

from __future__ import annotations

import os
import sys
import logging
from typing import IO, Optional

from gitversioning.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "gitversioning"

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


def _supports_color(stream: IO[str]) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError, ValueError):
        return False


class LevelColorFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal.

    Args:
        fmt: Log record format.
        datefmt: Timestamp format.
        color: Emit ANSI colors around the level name.
    """

    def __init__(self, fmt: str, datefmt: Optional[str] = None, *, color: bool = False) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        prefix = _LEVEL_COLORS.get(record.levelno) if self.color else None
        if prefix is None:
            return super().format(record)
        # Copy so other handlers keep the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{prefix}{record.levelname}{_RESET}"
        return super().format(colored)


def verbosity_level(verbose: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: int = 0, *, stream: Optional[IO[str]] = None) -> None:
    """Send gitversioning log records to ``stream`` (stderr by default).

    Calling it again replaces the previous handler. Records stop at the
    ``gitversioning`` logger so a host application's root handlers do
    not print them twice.

    Args:
        verbose: Number of ``-v`` flags, see :func:`verbosity_level`.
        stream: Output stream.
    """
    stream = stream or sys.stderr
    level = verbosity_level(verbose)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        LevelColorFormatter(
            LOG_VERBOSE_FORMAT if verbose >= 2 else LOG_DEFAULT_FORMAT,
            LOG_DATE_FORMAT,
            color=_supports_color(stream),
        )
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def disable_logging() -> None:
    """Remove the gitversioning handler and silence all records."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers[:] = [logging.NullHandler()]
    root.setLevel(logging.NOTSET)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``gitversioning.<name>``, or the package logger without a name.

    Names already in the namespace, such as ``__name__`` of a module of
    this package, are used as is.
    """
    if not name or name == ROOT_LOGGER_NAME:
        full_name = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(full_name)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not logger.handlers and not root.handlers:
        # Silent until setup_logging() runs
        logger.addHandler(logging.NullHandler())
    return logger
