"""
Unified data model exports for vergen.

This module re-exports the data models to provide a stable and
convenient public API. Users can import models directly from
``vergen.models`` instead of individual submodules.

Example:
    >>> from vergen.models import Version, ReleasePolicy, NextPolicy
"""

from __future__ import annotations

from vergen.models.version import Version
from vergen.models.policy import (
    ExtractSettings,
    NextPolicy,
    ReleasePolicy,
    VersionSource,
)

__all__ = [
    "Version",
    "VersionSource",
    "ReleasePolicy",
    "NextPolicy",
    "ExtractSettings",
]
