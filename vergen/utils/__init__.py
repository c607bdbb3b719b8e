"""
Utility helpers for vergen.

This package provides reusable utilities used across vergen, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem read helpers
- Commit hash lookup
- Output variable rendering

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from vergen.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from vergen.utils.console import (
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from vergen.utils.filesystem import read_files, safe_read_file

# ---------------------------------------------------------------------------
# Git utilities
# ---------------------------------------------------------------------------

from vergen.utils.git import git_head_hash, resolve_commit_hash

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "read_files",
    # Git
    "git_head_hash",
    "resolve_commit_hash",
]
