"""
Command-line interface for modgate.

Provides the main CLI entry point, handles global options and
configuration loading, and registers subcommands.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from modgate.config import load_config
from modgate.__version__ import __version__
from modgate.context import ModGateContext
from modgate.commands.check import check
from modgate.exceptions import ConfigError, ModGateError
from modgate.utils.console import print_error, print_warning, reconfigure_console
from modgate.utils.logger import get_logger, level_for_verbosity, setup_logging

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="MODGATE_CONFIG",
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
    envvar="MODGATE_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="modgate",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """modgate: validate mod dependencies and compute a load order.

    \b
    Available commands:
      modgate check [MODS_DIR]     Validate mods and print the load order

    \b
    Examples:
      modgate check
      modgate check path/to/Mods --format json
      modgate -vv check

    Use ``modgate COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    modgate_ctx = ModGateContext()
    modgate_ctx.config_path = config or loaded_config.source_path
    modgate_ctx.color = color
    modgate_ctx.verbose = verbose
    modgate_ctx.config = loaded_config
    ctx.obj = modgate_ctx

    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("modgate v%s", __version__)
    logger.debug("Config path: %s", modgate_ctx.config_path)
    logger.debug("Configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


cli.add_command(check)


def main() -> int:
    """Main entry point for the modgate CLI.

    Returns:
        Exit code:
            0   Success
            1   Invalid mod set or application error
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

    except ModGateError as exc:
        print_error(str(exc))
        logger.debug(
            "ModGateError details: %s",
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
