"""
Command-line interface for verspan.

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

from verspan.config import load_config
from verspan.__version__ import __version__
from verspan.context import VerspanContext
from verspan.exceptions import ConfigError, VerspanError
from verspan.utils.logger import get_logger, setup_logging_for_verbosity
from verspan.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="VERSPAN_CONFIG",
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
    envvar="VERSPAN_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="verspan",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """verspan — version ranges for package-index dependency resolution.

    \b
    Available commands:
      verspan export SPECIFIER     Show the resolver export form
      verspan requires [FILE]      Export constraints for dependency lines
      verspan sort VERSION...      Sort (and filter) version identifiers

    \b
    Examples:
      verspan export ">=1.0,!=1.5,<2"
      verspan requires --line "numpy>=1.21; sys_platform == 'linux'"
      verspan sort 1.0 1.0rc1 1.0.dev0 --spec ">=1.0rc1"

    Use ``verspan COMMAND --help`` for command-specific options.
    """
    level = setup_logging_for_verbosity(verbose)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    verspan_ctx = VerspanContext()
    verspan_ctx.config_path = config or loaded_config.source_path
    verspan_ctx.color = color
    verspan_ctx.verbose = verbose
    verspan_ctx.config = loaded_config
    ctx.obj = verspan_ctx

    # Respect NO_COLOR for Rich and downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("verspan v%s", __version__)
    logger.debug("Config path: %s", verspan_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


# Register CLI subcommands
from verspan.commands.export import export  # noqa: E402
from verspan.commands.requires import requires  # noqa: E402
from verspan.commands.sort import sort  # noqa: E402

cli.add_command(export)
cli.add_command(requires)
cli.add_command(sort)


def main() -> int:
    """Main entry point for the verspan CLI.

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

    except VerspanError as exc:
        print_error(str(exc))
        logger.debug(
            "VerspanError details: %s",
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
