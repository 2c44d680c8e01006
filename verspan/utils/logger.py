"""
Logging utilities for verspan.

This module centralizes logger configuration, formatting, and retrieval
for the verspan package. Library code only ever calls :func:`get_logger`;
handlers are installed by the CLI through :func:`setup_logging` (or
:func:`setup_logging_for_verbosity`), so importing verspan never emits
output on its own.
"""

from __future__ import annotations

import os
import sys
import copy
import logging
import threading
from typing import IO, Optional

from verspan.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

#: Root of the verspan logger hierarchy.
LOGGER_NAMESPACE = "verspan"

_logging_configured: bool = False
_lock = threading.Lock()


def _color_allowed(stream: IO[str]) -> bool:
    """Determine whether ANSI colors may be written to ``stream``."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError, ValueError):
        return False


class ColoredFormatter(logging.Formatter):
    """Logging formatter that colors the level name.

    The record is copied before decoration, so other handlers attached
    to the same logger still see the plain level name.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname) if self.use_color else None
        if color:
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure the ``verspan`` logger.

    Replaces any handlers installed by a previous call; configuration
    is protected by a process-wide lock.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Use the verbose format with timestamps and logger names.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    target = stream or sys.stderr
    with _lock:
        root_logger = logging.getLogger(LOGGER_NAMESPACE)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(target)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=_color_allowed(target),
            )
        )

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging_for_verbosity(verbose: int, *, stream: Optional[IO[str]] = None) -> int:
    """Configure logging from a CLI verbosity count.

    Returns:
        The logging level that was applied.
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2, stream=stream)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the verspan namespace.

    Args:
        name: Logger name, either relative (``"parser"``) or already
            qualified (``"verspan.parser"``).

    Returns:
        A logger instance under the ``verspan`` hierarchy.
    """
    if not name or name == LOGGER_NAMESPACE:
        qualified = LOGGER_NAMESPACE
    elif name.startswith(f"{LOGGER_NAMESPACE}."):
        qualified = name
    else:
        qualified = f"{LOGGER_NAMESPACE}.{name}"

    logger = logging.getLogger(qualified)

    # Library-safe default until the CLI installs a handler
    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if verspan logging has been configured."""
    return _logging_configured


def disable_logging() -> None:
    """Disable all verspan logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(LOGGER_NAMESPACE)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
