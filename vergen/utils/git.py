"""
Commit hash lookup for vergen.

Build metadata templates may reference the commit being built. The hash
is taken, in order, from an explicit value, the ``GITHUB_SHA`` variable
set on GitHub Actions runners, or ``git rev-parse HEAD`` in the working
directory.
"""

from __future__ import annotations

import os
import subprocess
from typing import Optional

from vergen.constants import COMMIT_HASH_ENVVAR
from vergen.utils.logger import get_logger

logger = get_logger("git")


def git_head_hash(cwd: Optional[str] = None) -> Optional[str]:
    """Return the hash of ``HEAD``, or ``None`` outside a usable git checkout."""
    try:
        output = subprocess.check_output(
            ["git", "rev-parse", "HEAD"],
            cwd=cwd,
            text=True,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git rev-parse HEAD failed: %s", exc)
        return None
    return output.strip() or None


def resolve_commit_hash(explicit: Optional[str] = None) -> Optional[str]:
    """Return the commit hash to use for build metadata.

    Args:
        explicit: Hash supplied on the command line, if any.

    Returns:
        The first non-empty value of ``explicit``, ``$GITHUB_SHA`` or the
        local ``HEAD`` hash; ``None`` if none is available.
    """
    if explicit:
        return explicit.strip()

    from_env = os.environ.get(COMMIT_HASH_ENVVAR, "").strip()
    if from_env:
        logger.debug("Using commit hash from %s", COMMIT_HASH_ENVVAR)
        return from_env

    head = git_head_hash()
    if head:
        logger.debug("Using commit hash of local HEAD")
    return head
