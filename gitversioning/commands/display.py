"""Display command implementation for gitversioning.

Prints the version information of a working copy on standard output.

Typical usage::

    # Aligned key = value lines
    $ gitversioning display

    # Properties form, ready for `source` or `eval`
    $ gitversioning display --format properties --prefix VERSION_

    # Rich table
    $ gitversioning display --format table
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import click

from gitversioning.commands import compute_info, version_options
from gitversioning.context import VersioningContext, pass_context
from gitversioning.core import format_version_text, version_rows
from gitversioning.utils.console import print_key_value_table, print_plain, print_warning


@click.command()
@version_options
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "properties", "table"], case_sensitive=False),
    default="text",
    help="Output format.",
)
@click.option(
    "--prefix",
    default="",
    help="Line prefix, defaults to '[version] ' (text) or 'VERSION_' (properties).",
)
@pass_context
def display(
    ctx: VersioningContext,
    path: Path,
    base_version: Optional[str],
    branch_env: List[str],
    build_number_mode: Optional[bool],
    build_number: Optional[str],
    project_version: Optional[str],
    output_format: str,
    prefix: str,
) -> None:
    """Write version information on the standard output."""
    info = compute_info(
        ctx,
        path,
        base_version=base_version,
        branch_env=list(branch_env),
        build_number_mode=build_number_mode,
        build_number=build_number,
        project_version=project_version,
    )

    output_format = output_format.lower()
    if output_format == "table":
        if info.is_empty():
            print_warning("No version can be computed from the SCM.")
            return
        print_key_value_table(
            version_rows(info),
            title=f"Version of {info.branch}",
            value_styles={"display": "version", "dirty": "dirty" if info.dirty else ""},
        )
        return

    print_plain(format_version_text(info, prefix, machine=output_format == "properties"))
