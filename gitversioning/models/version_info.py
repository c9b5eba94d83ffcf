"""
Computed version models for gitversioning.

:class:`VersionInfo` is the final, immutable result of a resolution.
:class:`VersionNumber` is its numeric view, used by build systems that
need ``major``/``minor``/``patch`` or a single monotonic version code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from gitversioning.constants import DEFAULT_PRECISION, SCM_NONE
from gitversioning.models.relaxed_version import RelaxedVersion


def compute_version_code(
    major: int,
    minor: int,
    patch: int,
    precision: int = DEFAULT_PRECISION,
) -> int:
    """Pack a version into a single integer.

    With a precision of 2, ``1.25.3`` becomes ``12503``; with a precision
    of 3 it becomes ``1025003``.
    """
    return major * 10 ** (2 * precision) + minor * 10**precision + patch


@dataclass(frozen=True)
class VersionNumber:
    """Numeric components of a computed version.

    Attributes:
        major: Major number.
        minor: Minor number.
        patch: Patch number.
        qualifier: Pre-release and build suffix (``-rc.1+meta``).
        version_code: Packed integer, see :func:`compute_version_code`.
        display_string: Strict rendering of the version.
    """

    major: int
    minor: int
    patch: int
    qualifier: str
    version_code: int
    display_string: str

    @classmethod
    def from_version(
        cls,
        version: RelaxedVersion,
        precision: int = DEFAULT_PRECISION,
    ) -> "VersionNumber":
        major, minor, patch = version.release
        return cls(
            major=major,
            minor=minor,
            patch=patch,
            qualifier=version.qualifier,
            version_code=compute_version_code(major, minor, patch, precision),
            display_string=version.strict_version(),
        )


@dataclass(frozen=True)
class VersionInfo:
    """Version information computed for a working copy.

    Attributes:
        scm: SCM identifier (``git``), or ``n/a`` for the empty info.
        branch: Branch name as seen by the resolver.
        branch_type: Branch type from the branch classification.
        branch_id: Branch name normalized for use in versions.
        commit: Full commit hash.
        commit_abbrev: Abbreviated commit hash (the ``build`` key).
        time: ISO-8601 commit time with offset.
        current_tag: Tag exactly on HEAD.
        last_tag: Last tag matching the last-tag pattern.
        dirty: Whether the working copy had local changes.
        shallow: Whether the history was truncated.
        base: Version base used for auto-versioning, or ``""``.
        full: Unique build identifier (branch id and commit).
        display: Human-facing computed version.
        version_number: Numeric view of the semantic version.
    """

    scm: str
    branch: str
    branch_type: str
    branch_id: str
    commit: str
    commit_abbrev: str
    time: Optional[str]
    current_tag: Optional[str]
    last_tag: Optional[str]
    dirty: bool
    shallow: bool
    base: str
    full: Optional[str]
    display: Optional[str]
    version_number: Optional[VersionNumber]

    @classmethod
    def empty(cls) -> "VersionInfo":
        """Return the info reported when no repository is available."""
        return _EMPTY

    def is_empty(self) -> bool:
        return self == _EMPTY

    def to_dict(self) -> Dict[str, Any]:
        """Return the output keys in their documented order."""
        number = self.version_number or VersionNumber.from_version(RelaxedVersion())
        return {
            "build": self.commit_abbrev,
            "branch": self.branch,
            "base": self.base,
            "branchId": self.branch_id,
            "branchType": self.branch_type,
            "commit": self.commit,
            "display": self.display or "",
            "full": self.full or "",
            "scm": self.scm,
            "tag": self.current_tag or "",
            "lastTag": self.last_tag or "",
            "dirty": self.dirty,
            "versionCode": number.version_code,
            "major": number.major,
            "minor": number.minor,
            "patch": number.patch,
            "qualifier": number.qualifier,
            "time": self.time or "",
        }


_EMPTY = VersionInfo(
    scm=SCM_NONE,
    branch="",
    branch_type="",
    branch_id="",
    commit="",
    commit_abbrev="",
    time=None,
    current_tag=None,
    last_tag=None,
    dirty=False,
    shallow=False,
    base="",
    full=None,
    display=None,
    version_number=None,
)
