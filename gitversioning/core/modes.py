"""
Display and release strategies for gitversioning.

The resolver delegates the last step of building a version string to a
strategy so projects can pick a convention without rewriting the
algorithm:

* :class:`DisplayMode` shapes versions of branches that are not
  auto-versioned (feature branches, or trunks without a base version).
* :class:`ReleaseMode` shapes versions of auto-versioned branches.

Both accept a plain callable instead of a built-in mode.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from gitversioning.constants import PRE_RELEASE_PREFIX
from gitversioning.exceptions import ConfigError
from gitversioning.models.relaxed_version import RelaxedVersion
from gitversioning.models.release import ReleaseClassification


@dataclass(frozen=True)
class DisplayContext:
    """Inputs available to a display strategy.

    Attributes:
        classification: Branch type and version base of the branch.
        branch_id: Normalized branch name.
        commit_abbrev: Abbreviated commit hash.
        full: Unique build identifier, without dirty suffix.
        last_tag: Last matching tag, if any.
        snapshot_suffix: Suffix marking snapshot versions.
    """

    classification: ReleaseClassification
    branch_id: str
    commit_abbrev: str
    full: str
    last_tag: Optional[str]
    snapshot_suffix: str

    @property
    def branch_base(self) -> str:
        """Version base of the branch, falling back to the branch id."""
        return self.classification.version_base or self.branch_id

    @property
    def commit_pre_release(self) -> str:
        return f"{PRE_RELEASE_PREFIX}{self.commit_abbrev}"


@dataclass(frozen=True)
class ReleaseContext:
    """Inputs available to a release strategy.

    Attributes:
        next_version: Version computed from the base and the next number.
        last_tag: Highest existing tag for the base, if any.
        current_tag: Tag exactly on HEAD, if any.
        release_build: Whether a tag on HEAD should be reused as is.
        snapshot_suffix: Suffix marking snapshot versions.
    """

    next_version: str
    last_tag: Optional[str]
    current_tag: Optional[str]
    release_build: bool
    snapshot_suffix: str


class DisplayMode(Enum):
    """Built-in display strategies for non auto-versioned branches."""

    FULL = "full"
    SNAPSHOT = "snapshot"
    BASE = "base"

    def __call__(self, context: DisplayContext) -> str:
        if self is DisplayMode.SNAPSHOT:
            return f"{context.branch_base}{context.snapshot_suffix}"
        if self is DisplayMode.BASE:
            return context.branch_base

        if not context.last_tag:
            return context.full
        tag_version = RelaxedVersion.parse(context.last_tag)
        if tag_version.is_relaxed_match:
            return tag_version.with_qualifier(context.commit_pre_release).relaxed_version()
        return f"{context.last_tag}-{context.commit_pre_release}"


class ReleaseMode(Enum):
    """Built-in release strategies for auto-versioned branches."""

    TAG = "tag"
    SNAPSHOT = "snapshot"

    def __call__(self, context: ReleaseContext) -> str:
        if self is ReleaseMode.SNAPSHOT:
            if context.release_build and context.current_tag:
                return context.current_tag
            return f"{context.next_version}{context.snapshot_suffix}"
        return context.next_version


DisplayStrategy = Callable[[DisplayContext], Any]
ReleaseStrategy = Callable[[ReleaseContext], Any]


def resolve_display_mode(mode: Union[str, DisplayMode, DisplayStrategy]) -> DisplayStrategy:
    """Turn a mode name, enum member or callable into a display strategy.

    Raises:
        ConfigError: ``mode`` is an unknown name or not callable.
    """
    return _resolve_mode(DisplayMode, mode, "display_mode")


def resolve_release_mode(mode: Union[str, ReleaseMode, ReleaseStrategy]) -> ReleaseStrategy:
    """Turn a mode name, enum member or callable into a release strategy.

    Raises:
        ConfigError: ``mode`` is an unknown name or not callable.
    """
    return _resolve_mode(ReleaseMode, mode, "release_mode")


def _resolve_mode(enum_type: Any, mode: Any, option: str) -> Any:
    if isinstance(mode, enum_type):
        return mode
    if isinstance(mode, str):
        try:
            return enum_type(mode.strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in enum_type)
            raise ConfigError(
                f"Unknown {option} {mode!r}, expected one of: {choices}",
                option=option,
            ) from exc
    if callable(mode):
        return mode
    raise ConfigError(
        f"The {option} must be a registered mode or a callable",
        option=option,
    )
