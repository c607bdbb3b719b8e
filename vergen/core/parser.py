"""
Semantic version parser for vergen.

Turns version text into :class:`~vergen.models.Version` objects using the
grammar published on https://semver.org/. The parser is strict: input is
matched exactly as given, with no whitespace trimming and no coercion of
partial versions such as ``1.2``.

Typical usage::

    from vergen.core import parse_version

    version = parse_version("5.0.0-BETA-16-SNAPSHOT+build.2017-03-15.3ecfad")
    version.prerelease      # "BETA-16-SNAPSHOT"
    version.build_metadata  # "build.2017-03-15.3ecfad"
    str(version)            # round-trips to the input
"""

from __future__ import annotations

from vergen.models import Version
from vergen.constants import SEMVER_PATTERN
from vergen.exceptions import VersionSyntaxError
from vergen.utils.logger import get_logger

logger = get_logger("parser")


def parse_version(text: str) -> Version:
    """Parse a semantic version string into a :class:`Version`.

    Args:
        text: A string of the form ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``.

    Returns:
        A :class:`Version` with integer numeric fields; absent prerelease or
        build metadata sections are ``None``. ``raw`` holds ``text``.

    Raises:
        VersionSyntaxError: If ``text`` is not a valid semantic version.

    Examples:
        >>> parse_version("5.0.3-SNAPSHOT")
        Version(major=5, minor=0, patch=3, prerelease='SNAPSHOT', build_metadata=None, raw='5.0.3-SNAPSHOT')
    """
    if not isinstance(text, str):
        raise VersionSyntaxError(
            str(text), f"Version must be a string, got {type(text).__name__}"
        )

    match = SEMVER_PATTERN.fullmatch(text)
    if match is None:
        raise VersionSyntaxError(text)

    version = Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=match.group("prerelease"),
        build_metadata=match.group("buildmetadata"),
        raw=text,
    )
    logger.debug("Parsed version %r -> %s", text, version)
    return version


def is_valid_version(text: str) -> bool:
    """Return True if ``text`` is a valid semantic version.

    Examples:
        >>> is_valid_version("1.0.0-alpha")
        True
        >>> is_valid_version("1.0")
        False
    """
    if not isinstance(text, str):
        return False
    return SEMVER_PATTERN.fullmatch(text) is not None
