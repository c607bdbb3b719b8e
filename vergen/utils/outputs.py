"""
Output variable helpers for vergen.

Computed versions and extracted data are exposed as flat ``NAME -> value``
mappings. They can be printed as:

- ``env``   — ``NAME=value`` lines, ready to append to ``$GITHUB_OUTPUT``
  or ``$GITHUB_ENV``
- ``json``  — a single JSON object
- ``table`` — a Rich table for humans
"""

from __future__ import annotations

import json
from typing import Dict, Mapping

import click

from vergen.models import Version
from vergen.constants import COMPONENT_SUFFIXES
from vergen.utils.console import print_table


def version_outputs(name: str, version: Version) -> Dict[str, str]:
    """Return the output variables describing one version.

    Always includes ``name`` (the full version), ``name_MAJOR``,
    ``name_MINOR`` and ``name_PATCH``; ``name_PRERELEASE`` and
    ``name_BUILDMETADATA`` only when those sections are present.

    Examples:
        >>> version_outputs("NEXT_VERSION", Version(1, 2, 4))
        {'NEXT_VERSION': '1.2.4', 'NEXT_VERSION_MAJOR': '1', 'NEXT_VERSION_MINOR': '2', 'NEXT_VERSION_PATCH': '4'}
    """
    outputs = {name: str(version)}
    for field_name, value in version.components().items():
        outputs[f"{name}{COMPONENT_SUFFIXES[field_name]}"] = str(value)
    return outputs


def render_outputs(
    variables: Mapping[str, str],
    output_format: str,
    *,
    title: str = "Outputs",
) -> None:
    """Print output variables in the requested format.

    Args:
        variables: Variables in display order.
        output_format: ``env``, ``json`` or ``table``.
        title: Table title (``table`` format only).

    Raises:
        ValueError: For an unknown format.
    """
    output_format = output_format.lower()

    if output_format == "env":
        for key, value in variables.items():
            click.echo(f"{key}={value}")
    elif output_format == "json":
        click.echo(json.dumps(dict(variables), indent=2))
    elif output_format == "table":
        print_table(
            [{"Variable": key, "Value": value} for key, value in variables.items()],
            headers=["Variable", "Value"],
            title=title,
            column_styles={
                "Variable": {"style": "bold cyan", "no_wrap": True},
                "Value": {"style": "version"},
            },
        )
    else:
        raise ValueError(f"Unknown output format: {output_format}")
