"""
Ready-made branch policies.

Each preset returns configuration options, to be passed to
:class:`~gitversioning.config.VersioningConfig` or
:meth:`Versioning.configure <gitversioning.core.versioning.Versioning.configure>`::

    versioning.configure(**cloud_preset(base_version="4.2"))

Branches outside the auto-versioned list are classified as
``disabled``, which is neither a release nor a trunk type, so they get
the display-mode version (``1.3.0-sha-abc1234``).

``cloud``
    ``main``, ``pre`` and ``release`` are versioned as releases. ``pre``
    and ``release`` branches use the version in their name, the others
    use ``base_version``.

``edge``
    ``release`` branches use the version in their name and ``main`` uses
    ``base_version``. With a major-only base (``2``) each build of
    ``main`` increments the minor number of the last ``2.N.P`` tag.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence, Union

from gitversioning.constants import (
    MAIN_BRANCH_TYPE,
    PRE_BRANCH_TYPE,
    RELEASE_BRANCH_TYPE,
)
from gitversioning.models.release import ReleaseClassification
from gitversioning.models.snapshot import RepositorySnapshot

DISABLED_BRANCH_TYPE = "disabled"

CLOUD_BRANCHES = (MAIN_BRANCH_TYPE, PRE_BRANCH_TYPE, RELEASE_BRANCH_TYPE)
EDGE_BRANCHES = (MAIN_BRANCH_TYPE, RELEASE_BRANCH_TYPE)

Branches = Union[str, Sequence[str]]


def auto_version_branches(branches: Branches) -> Sequence[str]:
    """Accept a list of names or a comma separated string (``"main,release"``)."""
    if isinstance(branches, str):
        branches = branches.split(",")
    return tuple(name.strip() for name in branches if name.strip())


def cloud_preset(base_version: str = "", branches: Branches = CLOUD_BRANCHES) -> Dict[str, Any]:
    """Options of the ``cloud`` policy.

    Args:
        base_version: Version base of auto-versioned branches that carry
            no version in their name.
        branches: Branch names or types that are auto-versioned.
    """
    names = auto_version_branches(branches)

    def parse(snapshot: RepositorySnapshot, separator: str) -> ReleaseClassification:
        classification = ReleaseClassification.from_branch(snapshot.branch, separator)
        if snapshot.branch not in names and classification.branch_type not in names:
            return ReleaseClassification(DISABLED_BRANCH_TYPE, snapshot.branch)
        if classification.branch_type in (RELEASE_BRANCH_TYPE, PRE_BRANCH_TYPE):
            return ReleaseClassification(RELEASE_BRANCH_TYPE, classification.version_base)
        return ReleaseClassification(RELEASE_BRANCH_TYPE, base_version)

    return {"branch_parser": parse, "release_branches": [RELEASE_BRANCH_TYPE]}


def edge_preset(base_version: str = "", branches: Branches = EDGE_BRANCHES) -> Dict[str, Any]:
    """Options of the ``edge`` policy.

    Args:
        base_version: Version base of ``main``, one or two numbers.
        branches: Branch types versioned as releases.
    """
    names = auto_version_branches(branches)

    def parse(snapshot: RepositorySnapshot, separator: str) -> ReleaseClassification:
        classification = ReleaseClassification.from_branch(snapshot.branch, separator)
        if classification.branch_type == RELEASE_BRANCH_TYPE:
            return ReleaseClassification(RELEASE_BRANCH_TYPE, classification.version_base)
        if snapshot.branch == MAIN_BRANCH_TYPE:
            return ReleaseClassification(classification.branch_type, base_version)
        return ReleaseClassification(DISABLED_BRANCH_TYPE, snapshot.branch)

    options: Dict[str, Any] = {"branch_parser": parse, "release_branches": list(names)}
    if base_version.strip().isdigit():
        # Last tag of the major line, for the display of other branches
        options["last_tag_pattern"] = rf"^{base_version.strip()}\.(\d+)\.\d+$"
    return options
