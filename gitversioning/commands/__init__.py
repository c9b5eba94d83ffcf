"""
Shared helpers for gitversioning CLI commands.

Every command computes the version of a working copy the same way:
configuration from the group context, overridden by command-line
options, resolved through a :class:`Versioning` session.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click

from gitversioning.context import VersioningContext
from gitversioning.core import Versioning
from gitversioning.models import VersionInfo
from gitversioning.utils.logger import get_logger

logger = get_logger("commands")

F = Callable[..., Any]


def version_options(func: F) -> F:
    """Attach the options that override configuration values."""
    options = [
        click.argument(
            "path",
            type=click.Path(exists=True, file_okay=False, path_type=Path),
            default=".",
        ),
        click.option(
            "--base-version",
            help="Version base for trunk branches.",
        ),
        click.option(
            "--branch-env",
            multiple=True,
            help="Environment variable holding the branch name (repeatable).",
        ),
        click.option(
            "--build-number-mode/--no-build-number-mode",
            default=None,
            help="Use the CI build number instead of tag numbers.",
        ),
        click.option(
            "--build-number",
            help="Build number, instead of the configured environment variable.",
        ),
        click.option(
            "--project-version",
            help="Project version, used as version base in build-number mode.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def compute_info(
    ctx: VersioningContext,
    path: Path,
    *,
    base_version: Optional[str] = None,
    branch_env: Optional[List[str]] = None,
    build_number_mode: Optional[bool] = None,
    build_number: Optional[str] = None,
    project_version: Optional[str] = None,
) -> VersionInfo:
    """Compute the version of ``path`` with CLI overrides applied.

    Raises:
        VersioningError: Resolution failed.
    """
    overrides: Dict[str, Any] = {}
    if base_version is not None:
        overrides["base_version"] = base_version
    if branch_env:
        overrides["branch_env"] = list(branch_env)
    if build_number_mode is not None:
        overrides["build_number_mode"] = build_number_mode
    if project_version is not None:
        overrides["project_version"] = project_version

    environ: Dict[str, str] = dict(os.environ)
    if build_number is not None:
        environ[ctx.config.build_number_env] = build_number

    versioning = Versioning(path, ctx.config, environ=environ)
    if overrides:
        logger.debug("Command-line overrides: %s", overrides)
        versioning.configure(**overrides)
    return versioning.info
