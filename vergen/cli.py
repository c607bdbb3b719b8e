"""
Command-line interface for vergen.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from vergen.config import load_config
from vergen.__version__ import __version__
from vergen.context import VergenContext
from vergen.exceptions import ConfigError, VergenError
from vergen.utils.logger import get_logger, setup_logging
from vergen.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="VERGEN_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="VERGEN_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="vergen",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """vergen — release and next version computation for build pipelines.

    \b
    Available commands:
      vergen compute               Compute release and next versions
      vergen extract               Extract named values from files

    \b
    Examples:
      vergen compute --version 1.2.3-SNAPSHOT
      vergen compute --format env >> "$GITHUB_OUTPUT"
      vergen -v extract version.txt -p '/(\\d+\\.\\d+\\.\\d+)/'

    Use ``vergen COMMAND --help`` for command-specific options.
    """
    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    vergen_ctx = VergenContext()
    vergen_ctx.config_path = config or loaded_config.source_path
    vergen_ctx.color = color
    vergen_ctx.verbose = verbose
    vergen_ctx.config = loaded_config
    ctx.obj = vergen_ctx

    logger.debug("vergen v%s", __version__)
    logger.debug("Config path: %s", vergen_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from vergen.commands.compute import compute  # noqa: E402
from vergen.commands.extract import extract  # noqa: E402

cli.add_command(compute)
cli.add_command(extract)


def main() -> int:
    """Main entry point for the vergen CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except VergenError as exc:
        print_error(str(exc))
        logger.debug(
            "VergenError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
