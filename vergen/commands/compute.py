"""Compute command implementation for vergen.

Reads the current version of a project and derives the versions a release
pipeline needs:

- ``CURRENT_VERSION`` — the version as found
- ``RELEASE_VERSION`` — the version to release now
- ``NEXT_VERSION`` — the development version after the release
- ``NEXT_RELEASE_VERSION`` — the release the next version leads to

Each is also exported decomposed (``_MAJOR``, ``_MINOR``, ``_PATCH`` and,
when present, ``_PRERELEASE``/``_BUILDMETADATA``).

Settings come from the configuration file; every one of them can be
overridden on the command line.

Typical usage::

    # Literal version, human-readable table
    $ vergen compute --version 1.2.3-BETA-7-SNAPSHOT

    # Version from a file, exported to a GitHub Actions step
    $ vergen compute --version-file gradle.properties \\
        --extraction-pattern '(?<=version=).+' --format env >> "$GITHUB_OUTPUT"

    # Release with generated metadata, next minor
    $ vergen compute --version 1.2.3-SNAPSHOT --generate-metadata \\
        --metadata-pattern 'build.{date[YYYYMMDD]}.{hash[0,7]}' --increment-minor
"""

from __future__ import annotations

import sys
from pathlib import Path
from dataclasses import replace
from typing import Any, Dict, Optional

import click
from click.core import ParameterSource

from vergen.models import VersionSource
from vergen.exceptions import VergenError, VersionNotFoundError
from vergen.context import pass_context, VergenContext
from vergen.config import parse_datetime, validate_source
from vergen.core import extract_version, generate_versions, parse_version
from vergen.constants import OUTPUT_FORMATS, SOURCE_FILE, SOURCE_VARIABLE, VERSION_SOURCES
from vergen.utils import get_logger, print_error, resolve_commit_hash, safe_read_file
from vergen.utils.outputs import render_outputs, version_outputs

logger = get_logger("commands.compute")


def _flag(name: str, help_text: str):
    """A ``--name/--no-name`` switch whose default defers to the config file."""
    return click.option(f"--{name}/--no-{name}", default=None, help=help_text)


@click.command()
@click.option(
    "--source",
    type=click.Choice(list(VERSION_SOURCES), case_sensitive=False),
    help="Where to read the current version from (inferred from the options given).",
)
@click.option("--version", "version_text", help="Current version string.")
@click.option(
    "--version-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File containing the current version.",
)
@click.option(
    "--extraction-pattern",
    help="Regular expression locating the version in --version-file "
    "(first group if any, else the whole match).",
)
@_flag("cut-prerelease", "Release: drop the prerelease section.")
@_flag("cut-snapshot", "Release: drop a SNAPSHOT prerelease marker.")
@_flag("cut-metadata", "Release: drop build metadata.")
@_flag("generate-metadata", "Release: generate build metadata from --metadata-pattern.")
@click.option("--metadata-pattern", help="Release build metadata template, e.g. 'build.{date}.{hash}'.")
@click.option("--metadata-datetime", help="Date/time used for {date} placeholders (default: now).")
@click.option("--commit-hash", help="Commit hash used for {hash} placeholders (default: $GITHUB_SHA or git HEAD).")
@_flag("next-cut-prerelease", "Next: drop the prerelease section.")
@_flag("next-cut-metadata", "Next: drop build metadata.")
@_flag("next-put-metadata", "Next: copy build metadata from the release version.")
@_flag("increment-major", "Next: increment the major version.")
@_flag("increment-minor", "Next: increment the minor version.")
@_flag("increment-patch", "Next: increment the patch version.")
@_flag("increment-prerelease", "Next: increment the prerelease counter.")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def compute(ctx: VergenContext, output_format: str, **options: Any) -> None:
    """Compute release and next versions from the current version.

    \b
    Examples:
      vergen compute --version 5.0.3-SNAPSHOT
      vergen compute --source file --format env >> "$GITHUB_OUTPUT"
    """
    try:
        variables = _compute(ctx, _given(options))
        render_outputs(variables, output_format, title="Versions")

    except VergenError as e:
        print_error(f"{e}")
        logger.debug("Version computation failed", exc_info=True)
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in compute command")
        sys.exit(1)


def _compute(ctx: VergenContext, options: Dict[str, Any]) -> Dict[str, str]:
    """Resolve settings, compute all versions, and return output variables."""
    config = ctx.config
    source = _resolve_source(config.source, options)

    release_changes = _overrides(
        options,
        cut_prerelease="cut_prerelease",
        cut_snapshot="cut_snapshot",
        cut_metadata="cut_metadata",
        generate_metadata="generate_metadata",
        metadata_pattern="metadata_pattern",
    )
    if options.get("metadata_datetime"):
        release_changes["metadata_time"] = parse_datetime(
            options["metadata_datetime"], option="--metadata-datetime"
        )
    release_policy = replace(config.release, **release_changes)

    next_policy = replace(
        config.next,
        **_overrides(
            options,
            next_cut_prerelease="cut_prerelease",
            next_cut_metadata="cut_metadata",
            next_put_metadata="put_metadata",
            increment_major="increment_major",
            increment_minor="increment_minor",
            increment_patch="increment_patch",
            increment_prerelease="increment_prerelease",
        ),
    )

    commit_hash: Optional[str] = None
    if release_policy.generate_metadata:
        commit_hash = resolve_commit_hash(options.get("commit_hash"))

    current = parse_version(read_current_version(source))
    logger.info("Got version extracted: %s", current)

    versions = generate_versions(
        current,
        release_policy,
        next_policy,
        commit_hash=commit_hash,
    )
    logger.info("Got release version: %s", versions.release)
    logger.info("Got next version: %s", versions.next)

    variables: Dict[str, str] = {}
    for name, version in versions.as_dict().items():
        variables.update(version_outputs(name, version))
    return variables


def _given(options: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only options set on the command line or via environment."""
    click_ctx = click.get_current_context()
    return {
        name: value
        for name, value in options.items()
        if click_ctx.get_parameter_source(name)
        not in (None, ParameterSource.DEFAULT, ParameterSource.DEFAULT_MAP)
    }


def _overrides(options: Dict[str, Any], **mapping: str) -> Dict[str, Any]:
    """Collect CLI options that were given, renamed to policy attributes."""
    return {
        attr: options[option]
        for option, attr in mapping.items()
        if options.get(option) is not None
    }


def _resolve_source(base: VersionSource, options: Dict[str, Any]) -> VersionSource:
    """Apply CLI overrides to the configured version source."""
    changes: Dict[str, Any] = {}
    if options.get("version_text") is not None:
        changes["version"] = options["version_text"]
    if options.get("version_file") is not None:
        changes["version_file"] = str(options["version_file"])
    if options.get("extraction_pattern") is not None:
        changes["extraction_pattern"] = options["extraction_pattern"]

    kind = options.get("source")
    if kind is None:
        if "version" in changes:
            kind = SOURCE_VARIABLE
        elif "version_file" in changes:
            kind = SOURCE_FILE
    if kind is not None:
        changes["kind"] = kind.lower()

    return replace(base, **changes)


def read_current_version(source: VersionSource) -> str:
    """Return the raw current version text described by ``source``.

    Raises:
        ConfigError: The source is incomplete.
        FileOperationError: The version file cannot be read.
        RegexSyntaxError: The extraction pattern is invalid.
        VersionNotFoundError: The pattern does not match the file.
    """
    validate_source(source)

    if source.kind == SOURCE_FILE:
        content = safe_read_file(source.version_file)
        text = extract_version(content, source.extraction_pattern)
        if not text:
            raise VersionNotFoundError(source.version_file, source.extraction_pattern)
        logger.debug("Extracted %r from %s", text, source.version_file)
        return text

    return source.version
