"""
Semantic version data model for vergen.

This module defines :class:`Version`, an immutable value object holding the
components of a parsed semantic version. Derived versions (release, next)
are always new instances built from an existing one; a version handed to a
generator is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Version:
    """
    A parsed semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated prerelease identifiers, or ``None``.
        build_metadata: Dot-separated build metadata identifiers, or ``None``.
        raw: Original text the version was parsed from (diagnostic only,
            ignored when comparing versions).
    """

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build_metadata: Optional[str] = None
    raw: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        """Return the canonical ``major.minor.patch[-pre][+meta]`` form."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build_metadata:
            version += f"+{self.build_metadata}"
        return version

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def replace(self, **changes: Any) -> "Version":
        """Return a copy of this version with the given fields changed."""
        return replace(self, **changes)

    def bump_patch(self) -> "Version":
        return self.replace(patch=self.patch + 1)

    def bump_minor(self) -> "Version":
        return self.replace(minor=self.minor + 1, patch=0)

    def bump_major(self) -> "Version":
        return self.replace(major=self.major + 1, minor=0, patch=0)

    def increment_prerelease(self) -> "Version":
        """Return a copy with the prerelease stage counter incremented.

        A prerelease without an ALPHA, BETA or RC counter is kept as is.
        """
        from vergen.core.prerelease import update_prerelease

        return self.replace(prerelease=update_prerelease(self.prerelease, reset=False))

    def reset_prerelease(self) -> "Version":
        """Return a copy with the prerelease stage counter set back to ``1``."""
        from vergen.core.prerelease import update_prerelease

        return self.replace(prerelease=update_prerelease(self.prerelease, reset=True))

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def is_prerelease(self) -> bool:
        """Return True if a prerelease section is present."""
        return bool(self.prerelease)

    @property
    def base_version(self) -> str:
        """Return ``major.minor.patch`` without prerelease or metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def components(self) -> Dict[str, Any]:
        """
        Return the version fields that are present, keyed by field name.

        ``prerelease`` and ``build_metadata`` are omitted when absent.
        """
        result: Dict[str, Any] = {
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
        }
        if self.prerelease:
            result["prerelease"] = self.prerelease
        if self.build_metadata:
            result["build_metadata"] = self.build_metadata
        return result
