"""Extract command implementation for vergen.

Pulls named values out of text files with delimited regular expressions
and prints them as output variables, next to the versions produced by
``vergen compute``.

Typical usage::

    # name/value pairs from group 1 and group 2
    $ vergen extract gradle.properties -p '/^(\\w+)=(.*)$/gm' --format env

    # every match stored under a base name: GROUP, GROUP_1, ...
    $ vergen extract build.gradle -p "/group\\s*=\\s*'([^']+)'/g" --name group
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from vergen.exceptions import ConfigError, VergenError
from vergen.context import pass_context, VergenContext
from vergen.core import DataExtractor, parse_regex
from vergen.constants import OUTPUT_FORMATS
from vergen.utils import get_logger, print_error, read_files
from vergen.utils.outputs import render_outputs

logger = get_logger("commands.extract")


@click.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--pattern",
    "-p",
    "patterns",
    multiple=True,
    help="Delimited regular expression, e.g. '/key=(.+)/g'. Repeatable.",
)
@click.option(
    "--name",
    "-n",
    help="Base variable name. Without it, group 1 names each value and group 2 holds it.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def extract(
    ctx: VergenContext,
    files: Tuple[Path, ...],
    patterns: Tuple[str, ...],
    name: Optional[str],
    output_format: str,
) -> None:
    """Extract named values from FILES with regular expressions.

    FILES and --pattern default to the [vergen.extract] configuration.
    """
    try:
        variables = _extract(ctx, files, patterns, name)
        render_outputs(variables, output_format, title="Extracted data")

    except VergenError as e:
        print_error(f"{e}")
        logger.debug("Data extraction failed", exc_info=True)
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in extract command")
        sys.exit(1)


def _extract(
    ctx: VergenContext,
    files: Tuple[Path, ...],
    patterns: Tuple[str, ...],
    name: Optional[str],
) -> Dict[str, str]:
    """Run the extractor and flatten its per-file results."""
    settings = ctx.config.extract
    file_list = [str(f) for f in files] or list(settings.files)
    pattern_list = list(patterns) or list(settings.patterns)
    base_name = name if name is not None else settings.name

    if not pattern_list:
        raise ConfigError("At least one extraction pattern is required", option="patterns")
    if not file_list:
        raise ConfigError("At least one file is required", option="files")

    extractor = DataExtractor([parse_regex(p) for p in pattern_list], name=base_name)
    results = extractor.extract(read_files(file_list))

    variables: Dict[str, str] = {}
    for source, values in results.items():
        for key, value in values.items():
            if key in variables:
                logger.warning("Variable %s from %s overrides an earlier value", key, source)
            variables[key] = value
        logger.info("Got %d variable(s) from %s", len(values), source)
    return variables
