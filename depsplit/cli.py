"""
Command-line interface for depsplit.

The ``depsplit`` group sets up logging and colors, loads the configuration
file once and hands it to subcommands through :class:`DepSplitContext`.
:func:`main` is the console-script entry point and maps every failure to
an exit code.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depsplit.config import load_config
from depsplit.__version__ import __version__
from depsplit.context import DepSplitContext
from depsplit.exceptions import ConfigError, DepSplitError
from depsplit.utils.console import print_error, print_warning, reconfigure_console
from depsplit.utils.logger import get_logger, level_for_verbosity, setup_logging

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="DEPSPLIT_CONFIG",
    help="Configuration file (default: depsplit.toml, then "
    "[tool.depsplit] in pyproject.toml).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log progress to stderr (-v for INFO, -vv for DEBUG with timings).",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="DEPSPLIT_COLOR",
    help="Colorize tables and status messages.",
)
@click.version_option(
    version=__version__,
    prog_name="depsplit",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """Explain why a Cargo.lock holds several versions of the same crate.

    \b
    Commands:
      depsplit analyze     Classify every package and report upgrade candidates

    \b
    Examples:
      depsplit analyze
      depsplit analyze --trim --dot Cargo.lock | dot -Tsvg > deps.svg
      depsplit -v analyze --format table

    Run ``depsplit COMMAND --help`` for the options of a command.
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging at %s level", logging.getLevelName(level))

    _apply_color(color)
    ctx.obj = _build_context(config, verbose=verbose, color=color)


def _apply_color(color: bool) -> None:
    """Export the color choice through ``NO_COLOR`` and rebuild consoles."""
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


def _build_context(
    config_path: Optional[Path],
    *,
    verbose: int,
    color: bool,
) -> DepSplitContext:
    """Load the configuration file and wrap it in a command context.

    Exits with status 1 when the configuration is invalid.
    """
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    context = DepSplitContext()
    context.config_path = config_path or config.source_path
    context.verbose = verbose
    context.color = color
    context.config = config

    logger.debug("depsplit v%s (config: %s)", __version__, context.config_path)
    if config.source_path:
        logger.debug("Configuration: %s", config.to_log_dict())
    return context


from depsplit.commands.analyze import analyze  # noqa: E402

cli.add_command(analyze)


def main() -> int:
    """Run the CLI and return its exit code.

    Returns:
        0 on success, 1 on analysis or unexpected errors, 2 on usage errors
        and 130 when interrupted.
    """
    try:
        cli(standalone_mode=False)
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("\nOperation cancelled by user")
        return 130
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except DepSplitError as exc:
        print_error(str(exc))
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return 1
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
