"""
Centralized constants for gitversioning.

This module defines immutable configuration values used across
gitversioning, including branch conventions, version suffixes, output
formats, and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# SCM
# ---------------------------------------------------------------------------

#: Identifier reported in the ``scm`` field of computed versions.
SCM_GIT: Final[str] = "git"

#: ``scm`` value of the empty version (no repository found).
SCM_NONE: Final[str] = "n/a"

#: Branch name reported when HEAD is detached.
DETACHED_HEAD: Final[str] = "HEAD"

# ---------------------------------------------------------------------------
# Branch conventions
# ---------------------------------------------------------------------------

#: Default separator between branch type and version base.
DEFAULT_SEPARATOR: Final[str] = "/"

RELEASE_BRANCH_TYPE: Final[str] = "release"
PRE_BRANCH_TYPE: Final[str] = "pre"
MAIN_BRANCH_TYPE: Final[str] = "main"

#: Branch types whose version base comes from the branch name.
DEFAULT_RELEASE_BRANCHES: Final[Sequence[str]] = (
    RELEASE_BRANCH_TYPE,
    PRE_BRANCH_TYPE,
)

#: Branch types auto-versioned from the configured base version.
DEFAULT_TRUNK_BRANCHES: Final[Sequence[str]] = (MAIN_BRANCH_TYPE,)

# ---------------------------------------------------------------------------
# Version computation
# ---------------------------------------------------------------------------

#: Prefix of the commit pre-release identifier. Must not contain a ``.``,
#: which separates pre-release identifiers.
PRE_RELEASE_PREFIX: Final[str] = "sha-"

DEFAULT_DIRTY_SUFFIX: Final[str] = "-dirty"

DEFAULT_SNAPSHOT_SUFFIX: Final[str] = "-SNAPSHOT"

#: Default pattern used to pick the last tag: any tag ending with digits.
DEFAULT_LAST_TAG_PATTERN: Final[str] = r"(\d+)$"

#: Digits per component in the version code (1.25.3 -> 12503).
DEFAULT_PRECISION: Final[int] = 2

#: Environment variable holding the CI build number.
DEFAULT_BUILD_NUMBER_ENV: Final[str] = "BUILD_NUMBER"

DEFAULT_DISPLAY_MODE: Final[str] = "full"

DEFAULT_RELEASE_MODE: Final[str] = "tag"

#: Largest value a version component may hold.
MAX_VERSION_COMPONENT: Final[int] = 2**31 - 1

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

#: Line prefix of the human-readable version block.
DEFAULT_DISPLAY_PREFIX: Final[str] = "[version] "

#: Key prefix of the machine-readable properties block.
DEFAULT_FILE_PREFIX: Final[str] = "VERSION_"

#: Default properties file written by ``gitversioning file``.
DEFAULT_VERSION_FILE: Final[str] = "build/version.properties"

#: Width of the key column in the human-readable block.
DISPLAY_KEY_WIDTH: Final[int] = 12

# ---------------------------------------------------------------------------
# Configuration files
# ---------------------------------------------------------------------------

CONFIG_FILE_NAME: Final[str] = "gitversioning.toml"

CONFIG_SECTION: Final[str] = "gitversioning"

CONFIG_ENV_VAR: Final[str] = "GITVERSIONING_CONFIG"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
