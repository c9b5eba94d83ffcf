"""Show command implementation for gitversioning.

Prints the computed display version alone, for scripts::

    $ VERSION=$(gitversioning show)
    $ gitversioning show --pep440
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import click

from gitversioning.commands import compute_info, version_options
from gitversioning.context import VersioningContext, pass_context
from gitversioning.utils.console import print_plain
from gitversioning.utils.version_utils import to_pep440


@click.command()
@version_options
@click.option(
    "--pep440",
    is_flag=True,
    help="Print a PEP 440 compatible version.",
)
@pass_context
def show(
    ctx: VersioningContext,
    path: Path,
    base_version: Optional[str],
    branch_env: List[str],
    build_number_mode: Optional[bool],
    build_number: Optional[str],
    project_version: Optional[str],
    pep440: bool,
) -> None:
    """Print the computed version."""
    info = compute_info(
        ctx,
        path,
        base_version=base_version,
        branch_env=list(branch_env),
        build_number_mode=build_number_mode,
        build_number=build_number,
        project_version=project_version,
    )
    version = to_pep440(info) if pep440 else info.display or ""
    print_plain(f"{version}\n")
