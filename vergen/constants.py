"""
Centralized constants for vergen.

This module defines immutable values used across vergen, including the
semantic-version grammar, the metadata template grammar, configuration
defaults, output variable names, and logging formats. All values are
intended to be treated as read-only.
"""

import re
from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Semantic version grammar
# ---------------------------------------------------------------------------

#: Semantic versioning 2.0.0 grammar, as suggested on https://semver.org/.
SEMVER_PATTERN: Final["re.Pattern[str]"] = re.compile(
    r"^(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

#: Reference printed with version syntax errors.
SEMVER_REFERENCE_URL: Final[str] = "https://semver.org/"

# ---------------------------------------------------------------------------
# Prerelease handling
# ---------------------------------------------------------------------------

#: Prerelease stage markers that carry a counter (matched case-insensitively).
PRERELEASE_MARKERS: Final[Sequence[str]] = ("ALPHA", "BETA", "RC")

#: Counter directly following a stage marker, optionally via ``.`` or ``-``.
PRERELEASE_NUMBER_PATTERN: Final["re.Pattern[str]"] = re.compile(
    r"(?:" + "|".join(PRERELEASE_MARKERS) + r")[-.]?(?P<number>[0-9]+)",
    re.IGNORECASE,
)

#: Conventional in-progress build marker.
SNAPSHOT: Final[str] = "SNAPSHOT"

#: Snapshot marker appended to another prerelease identifier.
SNAPSHOT_SUFFIX_PATTERN: Final["re.Pattern[str]"] = re.compile(r"[-.]" + SNAPSHOT + r"$")

# ---------------------------------------------------------------------------
# Build metadata templates
# ---------------------------------------------------------------------------

#: Whole-pattern validation: literals and ``{date...}``/``{hash...}`` only.
METADATA_VALIDATION_PATTERN: Final["re.Pattern[str]"] = re.compile(
    r"^(?:[0-9a-zA-Z\-.]*\{(?:date|hash)(?:\[[^\]]*\])?\})*[0-9a-zA-Z\-.]*$"
)

#: A single placeholder with its word and optional bracketed format.
METADATA_PLACEHOLDER_PATTERN: Final["re.Pattern[str]"] = re.compile(
    r"\{(?P<word>[a-z]+)(?:\[(?P<format>[^\]]*)\])?\}"
)

#: Format used when a placeholder carries no ``[...]`` argument.
METADATA_DEFAULT_FORMATS: Final[Mapping[str, str]] = {
    "date": "YYYY-MM-DD",
    "hash": "0, 8",
}

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Version source kinds.
SOURCE_VARIABLE: Final[str] = "variable"
SOURCE_FILE: Final[str] = "file"
VERSION_SOURCES: Final[Sequence[str]] = (SOURCE_VARIABLE, SOURCE_FILE)

DEFAULT_RELEASE_CUT_PRERELEASE: Final[bool] = False
DEFAULT_RELEASE_CUT_SNAPSHOT: Final[bool] = True
DEFAULT_RELEASE_CUT_METADATA: Final[bool] = True
DEFAULT_RELEASE_GENERATE_METADATA: Final[bool] = False
DEFAULT_METADATA_PATTERN: Final[str] = "build.{date}.{hash}"

DEFAULT_NEXT_CUT_PRERELEASE: Final[bool] = False
DEFAULT_NEXT_CUT_METADATA: Final[bool] = True
DEFAULT_NEXT_PUT_METADATA: Final[bool] = False

#: Environment variable carrying the commit hash on GitHub Actions runners.
COMMIT_HASH_ENVVAR: Final[str] = "GITHUB_SHA"

# ---------------------------------------------------------------------------
# Output variables
# ---------------------------------------------------------------------------

CURRENT_VERSION: Final[str] = "CURRENT_VERSION"
RELEASE_VERSION: Final[str] = "RELEASE_VERSION"
NEXT_VERSION: Final[str] = "NEXT_VERSION"
NEXT_RELEASE_VERSION: Final[str] = "NEXT_RELEASE_VERSION"

#: Suffixes used to export decomposed version fields.
COMPONENT_SUFFIXES: Final[Mapping[str, str]] = {
    "major": "_MAJOR",
    "minor": "_MINOR",
    "patch": "_PATCH",
    "prerelease": "_PRERELEASE",
    "build_metadata": "_BUILDMETADATA",
}

#: Output formats understood by the commands.
OUTPUT_FORMATS: Final[Sequence[str]] = ("table", "env", "json")

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading version files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
