"""Versioning options and where they come from.

:class:`VersioningConfig` holds every option of the resolver with its
default. :func:`load_config` fills it from the first file found:

1. ``--config`` or ``GITVERSIONING_CONFIG``, which must exist
2. ``gitversioning.toml`` with a ``[gitversioning]`` table
3. ``pyproject.toml`` with a ``[tool.gitversioning]`` table

Command-line options override file values; unknown keys and wrongly
typed values are rejected.

Example (``gitversioning.toml``)::

    [gitversioning]
    release_branches = ["release", "hotfix"]
    base_version = "2.0"
    dirty_fail_on_releases = true
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from gitversioning.exceptions import ConfigError
from gitversioning.utils.logger import get_logger
from gitversioning.constants import (
    CONFIG_FILE_NAME,
    CONFIG_SECTION,
    DEFAULT_BUILD_NUMBER_ENV,
    DEFAULT_DIRTY_SUFFIX,
    DEFAULT_DISPLAY_MODE,
    DEFAULT_LAST_TAG_PATTERN,
    DEFAULT_PRECISION,
    DEFAULT_RELEASE_BRANCHES,
    DEFAULT_RELEASE_MODE,
    DEFAULT_SEPARATOR,
    DEFAULT_SNAPSHOT_SUFFIX,
    DEFAULT_TRUNK_BRANCHES,
)

if TYPE_CHECKING:
    from gitversioning.models.release import ReleaseClassification
    from gitversioning.models.snapshot import RepositorySnapshot

    BranchParser = Callable[[RepositorySnapshot, str], ReleaseClassification]

logger = get_logger("config")

# Options that cannot be expressed in TOML
_RUNTIME_ONLY = frozenset({"branch_parser", "source_path"})


@dataclass
class VersioningConfig:
    """Parsed and validated gitversioning configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        separator: Separator between branch type and version base.
        release_branches: Branch types whose version base drives the version.
        trunk_branches: Branch types versioned from ``base_version``.
        base_version: Version base for trunk branches (and release
            branches without a version in their name).
        dirty_suffix: Suffix appended when the working copy is dirty.
        dirty_fail_on_releases: Abort on a dirty release branch.
        no_warning_on_dirty: Silence the dirty working copy warning.
        dirty_status_log: Log the categorized status of a dirty copy.
        precision: Digits per number in the version code.
        build_number_mode: Use a CI build number instead of tag numbers.
        build_number_env: Environment variable holding the build number.
        project_version: Project version, used as base in build-number mode.
        last_tag_pattern: Pattern selecting the last tag, group 1 numeric.
        branch_env: Environment variables checked, in order, for the
            branch name (detached checkouts on CI).
        snapshot_suffix: Suffix marking snapshot versions.
        release_build: Reuse a tag placed on HEAD as the version.
        display_mode: Display strategy name or callable.
        release_mode: Release strategy name or callable.
        branch_parser: Replaces the default branch classification.
        source_path: Path to the loaded config file, or ``None``.
    """

    separator: str = DEFAULT_SEPARATOR
    release_branches: List[str] = field(default_factory=lambda: list(DEFAULT_RELEASE_BRANCHES))
    trunk_branches: List[str] = field(default_factory=lambda: list(DEFAULT_TRUNK_BRANCHES))
    base_version: str = ""
    dirty_suffix: str = DEFAULT_DIRTY_SUFFIX
    dirty_fail_on_releases: bool = False
    no_warning_on_dirty: bool = False
    dirty_status_log: bool = False
    precision: int = DEFAULT_PRECISION
    build_number_mode: bool = False
    build_number_env: str = DEFAULT_BUILD_NUMBER_ENV
    project_version: str = ""
    last_tag_pattern: str = DEFAULT_LAST_TAG_PATTERN
    branch_env: List[str] = field(default_factory=list)
    snapshot_suffix: str = DEFAULT_SNAPSHOT_SUFFIX
    release_build: bool = True
    display_mode: Any = DEFAULT_DISPLAY_MODE
    release_mode: Any = DEFAULT_RELEASE_MODE
    branch_parser: Optional["BranchParser"] = field(default=None, repr=False)

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes runtime-only fields.
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in _RUNTIME_ONLY
        }

    def fingerprint(self) -> Tuple[Any, ...]:
        """Return a hashable snapshot of every option.

        Two configurations with equal fingerprints resolve identically.
        """
        values: List[Any] = []
        for f in fields(self):
            if f.name == "source_path":
                continue
            value = getattr(self, f.name)
            if isinstance(value, list):
                value = tuple(value)
            values.append(value)
        return tuple(values)


def discover_config_file(
    explicit_path: Optional[Path] = None,
    search_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``GITVERSIONING_CONFIG``)
    2. ``gitversioning.toml`` in ``search_dir``
    3. ``pyproject.toml`` with ``[tool.gitversioning]`` in ``search_dir``

    Args:
        explicit_path: Explicit config path. If provided, must exist.
        search_dir: Directory to search, defaults to the current directory.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    directory = search_dir or Path.cwd()

    own_toml = directory / CONFIG_FILE_NAME
    if own_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, own_toml)
        return own_toml

    pyproject_toml = directory / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", CONFIG_SECTION, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.gitversioning]`` section.

    Parse errors are ignored so a broken pyproject.toml falls back to
    defaults instead of failing discovery.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return CONFIG_SECTION in raw.get("tool", {})


def load_config(
    config_path: Optional[Path] = None,
    search_dir: Optional[Path] = None,
) -> VersioningConfig:
    """Load and validate gitversioning configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).
        search_dir: Directory searched during auto-discovery.

    Returns:
        Validated :class:`VersioningConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path, search_dir)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return VersioningConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(CONFIG_SECTION, {})
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no %s section, using defaults", CONFIG_SECTION)
        return VersioningConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


_BOOL_OPTIONS = (
    "dirty_fail_on_releases",
    "no_warning_on_dirty",
    "dirty_status_log",
    "build_number_mode",
    "release_build",
)

_STR_OPTIONS = (
    "separator",
    "base_version",
    "dirty_suffix",
    "build_number_env",
    "project_version",
    "last_tag_pattern",
    "snapshot_suffix",
    "display_mode",
    "release_mode",
)

_LIST_OPTIONS = (
    "release_branches",
    "trunk_branches",
    "branch_env",
)


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> VersioningConfig:
    """Parse and validate the ``[gitversioning]`` table.

    Rejects unknown keys and type mismatches.

    Raises:
        ConfigError: Unknown keys or incorrect types (e.g., string for boolean).
    """
    config = VersioningConfig()

    known = set(_BOOL_OPTIONS) | set(_STR_OPTIONS) | set(_LIST_OPTIONS) | {"precision"}
    unknown = set(section.keys()) - known
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for name in _BOOL_OPTIONS:
        if name in section:
            setattr(config, name, _expect(section, name, bool, "a boolean", config_path))

    for name in _STR_OPTIONS:
        if name in section:
            setattr(config, name, _expect(section, name, str, "a string", config_path))

    for name in _LIST_OPTIONS:
        if name in section:
            val = section[name]
            if not isinstance(val, list) or not all(isinstance(item, str) for item in val):
                raise ConfigError(
                    f"{name} must be a list of strings",
                    config_path=config_path,
                    option=name,
                )
            setattr(config, name, list(val))

    if "precision" in section:
        val = section["precision"]
        # bool is a subclass of int
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise ConfigError(
                f"precision must be a positive integer, got {val!r}",
                config_path=config_path,
                option="precision",
            )
        config.precision = val

    if not config.separator:
        raise ConfigError(
            "separator must not be empty",
            config_path=config_path,
            option="separator",
        )

    return config


def _expect(
    section: Dict[str, Any],
    name: str,
    expected: type,
    description: str,
    config_path: str,
) -> Any:
    val = section[name]
    if not isinstance(val, expected):
        raise ConfigError(
            f"{name} must be {description}, got {type(val).__name__}",
            config_path=config_path,
            option=name,
        )
    return val
