"""
Console output utilities for vergen using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`vergen.utils.logger`.

Guidelines:
- print_* status functions write to stderr, so a pipeline can capture
  stdout without picking up messages
- print_table renders human-readable results on stdout
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

VERGEN_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "version": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_consoles: Dict[bool, Console] = {}
_console_lock = threading.Lock()


def _should_use_color(stream: Any) -> bool:
    """Return True if colored output should be enabled for ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError):
        return False


def _get_console(*, stderr: bool = False) -> Console:
    """Return the shared Rich Console for stdout or stderr."""
    console = _consoles.get(stderr)
    if console is None:
        with _console_lock:
            console = _consoles.get(stderr)
            if console is None:
                use_color = _should_use_color(sys.stderr if stderr else sys.stdout)
                console = Console(
                    theme=VERGEN_THEME,
                    stderr=stderr,
                    no_color=not use_color,
                    highlight=use_color,
                )
                _consoles[stderr] = console
    return console


def reconfigure_console() -> None:
    """Reset the shared console instances.

    Useful if environment variables (e.g. NO_COLOR) or the standard
    streams change at runtime.
    """
    with _console_lock:
        _consoles.clear()


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_console(stderr=True).print(f"{prefix} {message}", style="success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    _get_console(stderr=True).print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _get_console(stderr=True).print(f"{prefix} {message}", style="warning", markup=False)


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        column_styles: Per-column style configuration.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)


def get_raw_console(*, stderr: bool = False) -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console(stderr=stderr)
