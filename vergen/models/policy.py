"""
Policy records for vergen.

These dataclasses are the explicit configuration handed to the version
generators. They are built once at the configuration boundary
(:mod:`vergen.config` plus CLI overrides) and never read ambient process
state themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from vergen.constants import (
    DEFAULT_METADATA_PATTERN,
    DEFAULT_NEXT_CUT_METADATA,
    DEFAULT_NEXT_CUT_PRERELEASE,
    DEFAULT_NEXT_PUT_METADATA,
    DEFAULT_RELEASE_CUT_METADATA,
    DEFAULT_RELEASE_CUT_PRERELEASE,
    DEFAULT_RELEASE_CUT_SNAPSHOT,
    DEFAULT_RELEASE_GENERATE_METADATA,
    SOURCE_VARIABLE,
)


@dataclass(frozen=True)
class VersionSource:
    """
    Where the current version comes from.

    Attributes:
        kind: ``"variable"`` to use :attr:`version` as-is, ``"file"`` to
            extract it from :attr:`version_file`.
        version: Literal version text.
        version_file: File holding the version.
        extraction_pattern: Regular expression locating the version inside
            :attr:`version_file` (group 1 if present, else whole match).
    """

    kind: str = SOURCE_VARIABLE
    version: Optional[str] = None
    version_file: Optional[str] = None
    extraction_pattern: Optional[str] = None


@dataclass(frozen=True)
class ReleasePolicy:
    """
    Rules for deriving the release version.

    Attributes:
        cut_prerelease: Drop the prerelease section entirely.
        cut_snapshot: Drop a ``SNAPSHOT`` prerelease or ``-SNAPSHOT``/
            ``.SNAPSHOT`` suffix (ignored when ``cut_prerelease`` is set).
        cut_metadata: Drop the build metadata section.
        generate_metadata: Generate build metadata from ``metadata_pattern``.
        metadata_pattern: Template expanded when generating metadata.
        metadata_time: Date used by ``{date}`` placeholders; current time
            when ``None``.
    """

    cut_prerelease: bool = DEFAULT_RELEASE_CUT_PRERELEASE
    cut_snapshot: bool = DEFAULT_RELEASE_CUT_SNAPSHOT
    cut_metadata: bool = DEFAULT_RELEASE_CUT_METADATA
    generate_metadata: bool = DEFAULT_RELEASE_GENERATE_METADATA
    metadata_pattern: str = DEFAULT_METADATA_PATTERN
    metadata_time: Optional[datetime] = None


@dataclass(frozen=True)
class NextPolicy:
    """
    Rules for deriving the next development version.

    When no ``increment_*`` flag is set the prerelease counter is
    incremented, falling back to a patch increment when there is none.

    Attributes:
        cut_prerelease: Drop the prerelease section.
        cut_metadata: Drop the build metadata section.
        put_metadata: Copy build metadata from the release version.
        increment_major: Reset prerelease counter, zero minor/patch, bump major.
        increment_minor: Reset prerelease counter, zero patch, bump minor.
        increment_patch: Reset prerelease counter, bump patch.
        increment_prerelease: Increment the prerelease counter.
    """

    cut_prerelease: bool = DEFAULT_NEXT_CUT_PRERELEASE
    cut_metadata: bool = DEFAULT_NEXT_CUT_METADATA
    put_metadata: bool = DEFAULT_NEXT_PUT_METADATA
    increment_major: bool = False
    increment_minor: bool = False
    increment_patch: bool = False
    increment_prerelease: bool = False

    @property
    def has_explicit_increment(self) -> bool:
        """Return True if any ``increment_*`` flag is set."""
        return (
            self.increment_prerelease
            or self.increment_patch
            or self.increment_minor
            or self.increment_major
        )


@dataclass(frozen=True)
class ExtractSettings:
    """
    Data extraction settings.

    Attributes:
        patterns: Delimited regular expressions (``/pattern/flags``).
        files: Files to search.
        name: Base variable name; when ``None`` names come from group 1.
    """

    patterns: Tuple[str, ...] = field(default_factory=tuple)
    files: Tuple[str, ...] = field(default_factory=tuple)
    name: Optional[str] = None
