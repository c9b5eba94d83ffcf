"""
Command-line interface for gitversioning.

``gitversioning`` is a click group; global options configure logging,
colors and the configuration file, then one of the commands computes
and outputs the version::

    gitversioning display                      # aligned key = value block
    gitversioning display -f properties        # VERSION_KEY=value lines
    gitversioning file -o build/version.properties
    gitversioning show --pep440                # version only

:func:`main` is the console-script entry point; it turns errors into exit
codes instead of tracebacks.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from gitversioning.__version__ import __version__
from gitversioning.constants import CONFIG_ENV_VAR
from gitversioning.context import VersioningContext
from gitversioning.exceptions import ConfigError, VersioningError
from gitversioning.utils.logger import get_logger, setup_logging
from gitversioning.utils.console import print_error, print_warning, reset_console
from gitversioning.commands.display import display
from gitversioning.commands.file import file_command
from gitversioning.commands.show import show

logger = get_logger("cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar=CONFIG_ENV_VAR,
    help=f"Configuration file (default: gitversioning.toml or pyproject.toml; env: {CONFIG_ENV_VAR}).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log progress (-v) or debug details (-vv) on stderr.",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="GITVERSIONING_COLOR",
    help="Colored output.",
)
@click.version_option(__version__, prog_name="gitversioning", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int, color: bool) -> None:
    """Compute project versions from git branches and tags.

    \b
    Commands:
      display   Print version information
      file      Write version information to a properties file
      show      Print the computed version only

    Run ``gitversioning COMMAND --help`` for the options of a command.
    """
    setup_logging(verbose)
    _apply_color(color)

    try:
        ctx.obj = VersioningContext.create(config, verbose=verbose, color=color)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(EXIT_ERROR) from exc

    logger.debug("gitversioning %s, configuration %s", __version__, ctx.obj.config_path or "<defaults>")
    logger.debug("Options: %s", ctx.obj.config.to_log_dict())


def _apply_color(color: bool) -> None:
    """Export the color choice as ``NO_COLOR`` for Rich and git."""
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reset_console()


cli.add_command(display)
cli.add_command(file_command)
cli.add_command(show)


def main() -> int:
    """Run the CLI and return its exit code.

    Returns:
        ``0`` on success, ``1`` when the version cannot be computed or an
        unexpected error occurs, click's code for usage errors (``2``),
        ``130`` when interrupted.
    """
    try:
        cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Interrupted")
        return EXIT_INTERRUPTED
    except VersioningError as exc:
        print_error(str(exc))
        logger.debug("Failure details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_ERROR
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception")
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
