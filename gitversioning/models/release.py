"""
Branch classification model for gitversioning.

A branch name such as ``release/2.0`` carries two pieces of information:
the *branch type* (``release``) which selects the versioning policy, and
the *version base* (``2.0``) used to look up and increment tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gitversioning.constants import DEFAULT_SEPARATOR


@dataclass(frozen=True)
class ReleaseClassification:
    """Branch type and version base derived from a branch name.

    Attributes:
        branch_type: Part of the branch name before the separator, or the
            whole name when there is no separator.
        version_base: Part after the separator, or ``""``.
    """

    branch_type: str
    version_base: str = ""

    @classmethod
    def from_branch(
        cls,
        branch: str,
        separator: Optional[str] = DEFAULT_SEPARATOR,
    ) -> "ReleaseClassification":
        """Split ``branch`` once on the first occurrence of ``separator``.

        Examples:
            >>> ReleaseClassification.from_branch("release/2.0")
            ReleaseClassification(branch_type='release', version_base='2.0')
            >>> ReleaseClassification.from_branch("feature/JIRA-1/fix")
            ReleaseClassification(branch_type='feature', version_base='JIRA-1/fix')
            >>> ReleaseClassification.from_branch("main")
            ReleaseClassification(branch_type='main', version_base='')
        """
        branch_type, _, version_base = branch.partition(separator or DEFAULT_SEPARATOR)
        return cls(branch_type, version_base)
