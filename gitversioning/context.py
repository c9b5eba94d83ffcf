"""
Click context object shared by gitversioning commands.

The ``gitversioning`` group loads the configuration once and stores it,
together with the global flags, in a :class:`VersioningContext`; each
command receives it through :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from gitversioning.config import VersioningConfig, load_config


class VersioningContext:
    """Per-invocation state of the CLI.

    Attributes:
        config_path: Configuration file in use, explicit or discovered.
        config: Configuration every command starts from.
        verbose: Number of ``-v`` flags.
        color: Whether colored output was requested.
    """

    __slots__ = ("config_path", "config", "verbose", "color")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.config: VersioningConfig = VersioningConfig()
        self.verbose: int = 0
        self.color: bool = True

    @classmethod
    def create(
        cls,
        config_path: Optional[Path] = None,
        *,
        verbose: int = 0,
        color: bool = True,
    ) -> "VersioningContext":
        """Load the configuration and build the context of a CLI run.

        Raises:
            ConfigError: The configuration file is missing or invalid.
        """
        ctx = cls()
        ctx.config = load_config(config_path)
        ctx.config_path = config_path or ctx.config.source_path
        ctx.verbose = verbose
        ctx.color = color
        return ctx


#: Injects the :class:`VersioningContext`, creating a default one for
#: commands invoked outside the group.
pass_context = click.make_pass_decorator(VersioningContext, ensure=True)
