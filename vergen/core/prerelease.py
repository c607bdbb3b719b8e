"""
Prerelease counter handling for vergen.

A prerelease such as ``BETA-7-SNAPSHOT`` or ``rc.2`` embeds a counter right
after a stage marker (ALPHA, BETA or RC, any case). This module locates the
first such counter and rewrites it, leaving every other identifier intact.
"""

from __future__ import annotations

from typing import Optional

from vergen.constants import PRERELEASE_NUMBER_PATTERN


def update_prerelease(prerelease: Optional[str], *, reset: bool) -> Optional[str]:
    """Increment or reset the stage counter inside a prerelease string.

    Only digits directly following a marker (optionally via one ``.`` or
    ``-``) qualify, and only the first such run is changed.

    Args:
        prerelease: Prerelease identifiers, or ``None``.
        reset: Replace the counter with ``1`` instead of incrementing it.

    Returns:
        The updated prerelease, or the input unchanged when it holds no
        counter. Callers detect the no-op by comparing with the input.

    Examples:
        >>> update_prerelease("BETA-7-SNAPSHOT", reset=False)
        'BETA-8-SNAPSHOT'
        >>> update_prerelease("TESTNG6-RC4", reset=True)
        'TESTNG6-RC1'
        >>> update_prerelease("BETA-SNAPSHOT-7", reset=False)
        'BETA-SNAPSHOT-7'
    """
    if not prerelease:
        return prerelease

    match = PRERELEASE_NUMBER_PATTERN.search(prerelease)
    if match is None:
        return prerelease

    number = 1 if reset else int(match.group("number")) + 1
    start, end = match.span("number")
    return f"{prerelease[:start]}{number}{prerelease[end:]}"
