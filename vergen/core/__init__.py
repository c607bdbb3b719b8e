"""
Core functionality exports for vergen.

This module provides convenient access to the core subsystems of vergen.
Importing from here keeps user-facing imports clean and stable:

    from vergen.core import parse_version, generate_release, generate_next
"""

from __future__ import annotations

from vergen.core.parser import is_valid_version, parse_version
from vergen.core.prerelease import update_prerelease
from vergen.core.metadata import (
    MetadataModel,
    expand_metadata,
    format_date,
    validate_metadata_pattern,
)
from vergen.core.generator import (
    VersionSet,
    generate_next,
    generate_release,
    generate_versions,
)
from vergen.core.extractor import (
    DataExtractor,
    RegexDescriptor,
    extract_version,
    parse_regex,
)

__all__ = [
    "parse_version",
    "is_valid_version",
    "update_prerelease",
    "MetadataModel",
    "expand_metadata",
    "format_date",
    "validate_metadata_pattern",
    "VersionSet",
    "generate_release",
    "generate_next",
    "generate_versions",
    "DataExtractor",
    "RegexDescriptor",
    "extract_version",
    "parse_regex",
]
