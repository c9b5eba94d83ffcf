"""
Memoizing versioning session.

:class:`Versioning` ties the gateway and the resolver together for one
working copy. The computed :class:`VersionInfo` is cached together with
the fingerprint of the configuration and the CI build number that
produced it, so repeated reads are free while a change of either forces
a recomputation.

Typical usage::

    versioning = Versioning(Path("."), load_config())
    print(versioning.info.display)

    versioning.configure(base_version="3.0")  # invalidates the cache
    print(versioning.info.display)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from gitversioning.config import VersioningConfig
from gitversioning.core.gateway import GitRepositoryGateway
from gitversioning.core.resolver import VersionResolver
from gitversioning.exceptions import ConfigError
from gitversioning.models.version_info import VersionInfo
from gitversioning.utils.logger import get_logger

logger = get_logger("versioning")


class Versioning:
    """Compute, cache and expose the version of a working copy.

    Args:
        root: Directory inside the working copy.
        config: Versioning configuration, defaults are used when omitted.
        environ: Environment for the build number and branch overrides,
            defaults to :data:`os.environ`.
        gateway: Repository gateway, built from ``root`` when omitted.
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        config: Optional[VersioningConfig] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        gateway: Optional[GitRepositoryGateway] = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or VersioningConfig()
        self.environ = os.environ if environ is None else environ
        self.gateway = gateway or GitRepositoryGateway(self.root, environ=self.environ)
        self._cache: Optional[Tuple[Tuple[Any, ...], VersionInfo]] = None

    @property
    def info(self) -> VersionInfo:
        """The version of the working copy, computed on first access."""
        build_number = self.build_number()
        fingerprint = (self.config.fingerprint(), build_number)
        if self._cache is not None and self._cache[0] == fingerprint:
            return self._cache[1]

        info = self._compute(build_number)
        self._cache = (fingerprint, info)
        return info

    def configure(self, **changes: Any) -> "Versioning":
        """Update configuration options and drop the cached version.

        Raises:
            ConfigError: An option name is unknown.
        """
        for name, value in changes.items():
            if name == "source_path" or not hasattr(self.config, name):
                raise ConfigError(f"Unknown configuration option: {name}", option=name)
            setattr(self.config, name, value)
        self.invalidate()
        return self

    def invalidate(self) -> None:
        """Drop the cached version; the next read recomputes it."""
        self._cache = None

    def build_number(self) -> Optional[str]:
        """Return the CI build number from the environment, if set."""
        value = self.environ.get(self.config.build_number_env, "").strip()
        return value or None

    def _compute(self, build_number: Optional[str]) -> VersionInfo:
        if not self.gateway.has_repository():
            logger.info("No git repository found at %s", self.root)
            return VersionInfo.empty()

        # Built before the snapshot so mode errors surface without git access
        resolver = VersionResolver(self.config)
        snapshot = self.gateway.snapshot(
            branch_env=self.config.branch_env,
            last_tag_pattern=self.config.last_tag_pattern,
        )
        return resolver.resolve(snapshot, build_number=build_number)
