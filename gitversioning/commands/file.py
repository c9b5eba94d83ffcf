"""File command implementation for gitversioning.

Writes the version information of a working copy to a properties file
that shells and CI steps can source::

    $ gitversioning file -o build/version.properties
    $ . build/version.properties && echo "$VERSION_DISPLAY"
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import click

from gitversioning.commands import compute_info, version_options
from gitversioning.constants import DEFAULT_FILE_PREFIX, DEFAULT_VERSION_FILE
from gitversioning.context import VersioningContext, pass_context
from gitversioning.core import format_version_text
from gitversioning.utils.console import print_success, print_warning
from gitversioning.utils.filesystem import resolve_output_path, write_text_atomic
from gitversioning.utils.logger import get_logger

logger = get_logger("commands.file")


@click.command(name="file")
@version_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_VERSION_FILE,
    show_default=True,
    help="Properties file to write, relative to PATH.",
)
@click.option(
    "--prefix",
    default=DEFAULT_FILE_PREFIX,
    show_default=True,
    help="Prefix of every property name.",
)
@pass_context
def file_command(
    ctx: VersioningContext,
    path: Path,
    base_version: Optional[str],
    branch_env: List[str],
    build_number_mode: Optional[bool],
    build_number: Optional[str],
    project_version: Optional[str],
    output: Path,
    prefix: str,
) -> None:
    """Write version information into a properties file."""
    info = compute_info(
        ctx,
        path,
        base_version=base_version,
        branch_env=list(branch_env),
        build_number_mode=build_number_mode,
        build_number=build_number,
        project_version=project_version,
    )
    if info.is_empty():
        print_warning("No version can be computed from the SCM, no file written.")
        return

    target = resolve_output_path(output, path)
    written = write_text_atomic(target, format_version_text(info, prefix, machine=True))
    logger.info("Version %s written to %s", info.display, written)
    print_success(f"Version {info.display} written to {written}")
