"""
Logging utilities for vergen.

This module centralizes logger configuration, formatting, and retrieval
for the vergen package. Output goes to stderr so that stdout stays free
for the computed variables a pipeline step captures.

Two formatters are available:

- :class:`ColoredFormatter` for terminals (ANSI colors when supported)
- :class:`WorkflowCommandFormatter` for GitHub Actions, which turns
  warnings and errors into ``::warning::``/``::error::`` annotations
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from vergen.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Logging formatter with optional ANSI color support."""

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
        if self.use_color and self._should_use_color():
            color = self.COLORS.get(record.levelname)
            if color:
                # Work on a copy so other handlers see the plain level name
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

    @staticmethod
    def _should_use_color() -> bool:
        """Determine whether ANSI colors should be emitted."""
        if os.environ.get("NO_COLOR"):
            return False
        if os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    ``DEBUG`` records become ``::debug::`` lines (shown only when step
    debugging is enabled), warnings ``::warning::`` and errors ``::error::``.
    ``INFO`` records are printed as plain lines.
    """

    COMMANDS = {
        "DEBUG": "debug",
        "WARNING": "warning",
        "ERROR": "error",
        "CRITICAL": "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelname)
        if command is None:
            return message
        return f"::{command}::{escape_workflow_data(message)}"


def escape_workflow_data(text: str) -> str:
    """Escape text for use as the data part of a workflow command."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def running_in_github_actions() -> bool:
    """Return True when executing inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
    workflow_commands: Optional[bool] = None,
) -> None:
    """Configure logging for vergen.

    This function is safe to call multiple times; configuration is
    protected by a process-wide lock.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Enable verbose formatting with timestamps.
        stream: Output stream; defaults to ``sys.stderr``.
        workflow_commands: Emit GitHub Actions workflow commands. Detected
            from the ``GITHUB_ACTIONS`` environment variable when ``None``.
    """
    global _logging_configured

    if workflow_commands is None:
        workflow_commands = running_in_github_actions()

    with _lock:
        root_logger = logging.getLogger("vergen")
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)

        formatter: logging.Formatter
        if workflow_commands:
            formatter = WorkflowCommandFormatter("%(message)s")
        else:
            fmt = LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT
            formatter = ColoredFormatter(
                fmt,
                datefmt=LOG_DATE_FORMAT,
                use_color=not os.environ.get("NO_COLOR"),
            )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the vergen namespace.

    Args:
        name: Logger name. Use ``__name__`` for module-relative naming.

    Returns:
        A logger instance under the ``vergen`` hierarchy.
    """
    if not name or name == "vergen":
        logger = logging.getLogger("vergen")
    elif name.startswith("vergen."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"vergen.{name}")

    # Ensure library-safe behavior if logging is not configured
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if vergen logging has been configured."""
    return _logging_configured


def disable_logging() -> None:
    """Disable all vergen logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger("vergen")
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
