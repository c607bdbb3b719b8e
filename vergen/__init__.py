"""
vergen — release and next version computation for build pipelines.

vergen reads a project's current semantic version (from a literal value or
a version file) and derives the versions a release pipeline needs:

    • Release version, with SNAPSHOT/prerelease markers cut
    • Generated build metadata from date and commit hash templates
    • Next development version, incremented by configurable rules
    • Output variables ready for GitHub Actions or any CI shell step

It can also extract arbitrary named values from text files with regular
expressions.

Example:
    >>> from vergen import parse_version, generate_release, ReleasePolicy
    >>> str(generate_release(parse_version("1.2.3-BETA-7-SNAPSHOT"), ReleasePolicy()))
    '1.2.3-BETA-7'
"""

from __future__ import annotations

from vergen.__version__ import __version__
from vergen.models import (
    ExtractSettings,
    NextPolicy,
    ReleasePolicy,
    Version,
    VersionSource,
)
from vergen.core import (
    DataExtractor,
    MetadataModel,
    VersionSet,
    expand_metadata,
    generate_next,
    generate_release,
    generate_versions,
    is_valid_version,
    parse_regex,
    parse_version,
    update_prerelease,
)
from vergen.exceptions import (
    MetadataPatternError,
    RegexSyntaxError,
    VergenError,
    VersionSyntaxError,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "vergen Contributors"
__license__ = "Apache-2.0"
__description__ = "Release and next version computation for build pipelines."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Models
    "Version",
    "VersionSource",
    "ReleasePolicy",
    "NextPolicy",
    "ExtractSettings",
    # Core
    "parse_version",
    "is_valid_version",
    "update_prerelease",
    "MetadataModel",
    "expand_metadata",
    "VersionSet",
    "generate_release",
    "generate_next",
    "generate_versions",
    "DataExtractor",
    "parse_regex",
    # Errors
    "VergenError",
    "VersionSyntaxError",
    "MetadataPatternError",
    "RegexSyntaxError",
]
