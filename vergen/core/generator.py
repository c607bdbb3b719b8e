"""
Release and next version generation for vergen.

Given the current version of a project, the generators derive:

1. **Release version** — the current version with development markers
   (prerelease, ``SNAPSHOT`` suffix, build metadata) cut according to a
   :class:`ReleasePolicy`, optionally with freshly generated metadata.
2. **Next version** — the version development continues on after the
   release, incremented according to a :class:`NextPolicy`.
3. **Next release version** — the next version passed through the same
   release policy, i.e. what the following release will be called.

All functions are pure: the input :class:`Version` objects are never
modified and every result is a new instance.

Typical usage::

    current = parse_version("1.2.3-BETA-7-SNAPSHOT")
    release = generate_release(current, ReleasePolicy())   # 1.2.3-BETA-7
    nxt = generate_next(current, release, NextPolicy())    # 1.2.3-BETA-8-SNAPSHOT
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from vergen.models import NextPolicy, ReleasePolicy, Version
from vergen.core.metadata import MetadataModel, expand_metadata
from vergen.constants import (
    CURRENT_VERSION,
    NEXT_RELEASE_VERSION,
    NEXT_VERSION,
    RELEASE_VERSION,
    SNAPSHOT,
    SNAPSHOT_SUFFIX_PATTERN,
)
from vergen.utils.logger import get_logger

logger = get_logger("generator")


@dataclass(frozen=True)
class VersionSet:
    """
    The versions computed for one pipeline run.

    Attributes:
        current: Version as read from the source.
        release: Version to release now.
        next: Development version after the release.
        next_release: Release version the next version will lead to.
    """

    current: Version
    release: Version
    next: Version
    next_release: Version

    def as_dict(self) -> Dict[str, Version]:
        """Return the versions keyed by their output variable name."""
        return {
            CURRENT_VERSION: self.current,
            RELEASE_VERSION: self.release,
            NEXT_VERSION: self.next,
            NEXT_RELEASE_VERSION: self.next_release,
        }


# ---------------------------------------------------------------------------
# Snapshot helpers
# ---------------------------------------------------------------------------


def _cut_snapshot(prerelease: Optional[str]) -> Optional[str]:
    """Remove a ``SNAPSHOT`` marker from a prerelease string.

    ``SNAPSHOT`` alone becomes ``None``; a ``-SNAPSHOT`` or ``.SNAPSHOT``
    suffix is stripped. Anything else is returned unchanged.
    """
    if prerelease is None:
        return None
    if prerelease == SNAPSHOT:
        return None

    match = SNAPSHOT_SUFFIX_PATTERN.search(prerelease)
    if match is None:
        logger.debug("No snapshot marker in prerelease %r, leaving as is", prerelease)
        return prerelease
    return prerelease[: match.start()] + prerelease[match.end():]


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def generate_release(
    current: Version,
    policy: ReleasePolicy,
    *,
    commit_hash: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Version:
    """Derive the release version from the current version.

    Steps, in order:

    1. ``cut_prerelease`` drops the prerelease; otherwise ``cut_snapshot``
       drops a ``SNAPSHOT`` marker.
    2. ``cut_metadata`` drops the build metadata.
    3. ``generate_metadata`` replaces the build metadata with the expansion
       of ``metadata_pattern``.

    Args:
        current: The current version.
        policy: Release rules.
        commit_hash: Full commit hash for ``{hash}`` placeholders.
        now: Date for ``{date}`` placeholders when ``policy.metadata_time``
            is not set. Defaults to the current time.

    Returns:
        A new :class:`Version`.

    Raises:
        MetadataPatternError: If metadata generation fails.
    """
    release = current

    if policy.cut_prerelease:
        release = release.replace(prerelease=None)
    elif policy.cut_snapshot:
        release = release.replace(prerelease=_cut_snapshot(release.prerelease))

    if policy.cut_metadata:
        release = release.replace(build_metadata=None)

    if policy.generate_metadata:
        model = MetadataModel(
            date=policy.metadata_time or now or datetime.now(),
            hash=commit_hash,
        )
        release = release.replace(
            build_metadata=expand_metadata(policy.metadata_pattern, model)
        )

    logger.debug("Release version for %s: %s", current, release)
    return release


def generate_next(current: Version, release: Version, policy: NextPolicy) -> Version:
    """Derive the next development version.

    Without explicit increment flags the prerelease counter is bumped,
    or the patch number when the prerelease carries no counter (or is
    about to be cut). Explicit flags apply in the order prerelease, patch,
    minor, major; each of patch/minor/major first resets the prerelease
    counter to ``1`` and zeroes the lower fields.

    Afterwards ``cut_prerelease`` and ``cut_metadata`` drop their sections,
    and ``put_metadata`` copies the build metadata of ``release``.

    Args:
        current: The current version.
        release: The release version computed from ``current``.
        policy: Next version rules.

    Returns:
        A new :class:`Version`.
    """
    nxt = current

    if not policy.has_explicit_increment:
        if policy.cut_prerelease:
            nxt = nxt.bump_patch()
        else:
            incremented = nxt.increment_prerelease()
            if incremented.prerelease == nxt.prerelease:
                # Nothing to increment in the prerelease
                nxt = nxt.bump_patch()
            else:
                nxt = incremented
    else:
        if policy.increment_prerelease:
            nxt = nxt.increment_prerelease()
        if policy.increment_patch:
            nxt = nxt.reset_prerelease().bump_patch()
        if policy.increment_minor:
            nxt = nxt.reset_prerelease().bump_minor()
        if policy.increment_major:
            nxt = nxt.reset_prerelease().bump_major()

    if policy.cut_prerelease:
        nxt = nxt.replace(prerelease=None)
    if policy.cut_metadata:
        nxt = nxt.replace(build_metadata=None)
    if policy.put_metadata:
        nxt = nxt.replace(build_metadata=release.build_metadata)

    logger.debug("Next version for %s: %s", current, nxt)
    return nxt


def generate_versions(
    current: Version,
    release_policy: ReleasePolicy,
    next_policy: NextPolicy,
    *,
    commit_hash: Optional[str] = None,
    now: Optional[datetime] = None,
) -> VersionSet:
    """Compute release, next and next release versions in one go.

    ``now`` is resolved once so both release computations share the same
    build date.
    """
    now = now or datetime.now()
    release = generate_release(current, release_policy, commit_hash=commit_hash, now=now)
    nxt = generate_next(current, release, next_policy)
    next_release = generate_release(nxt, release_policy, commit_hash=commit_hash, now=now)
    return VersionSet(current=current, release=release, next=nxt, next_release=next_release)
