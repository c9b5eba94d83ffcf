"""
Repository snapshot model for gitversioning.

A :class:`RepositorySnapshot` is everything the version resolver needs to
know about a working copy, captured once by the repository gateway. It
is immutable so that resolution stays a pure function of its inputs.
"""

from __future__ import annotations

from datetime import datetime
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class FileStatus:
    """Paths of a working copy grouped by kind of change.

    Attributes:
        staged: Paths with changes in the index.
        unstaged: Tracked paths modified in the working tree.
        conflicts: Paths with unresolved merge conflicts.
    """

    staged: Tuple[str, ...] = ()
    unstaged: Tuple[str, ...] = ()
    conflicts: Tuple[str, ...] = ()

    def has_changes(self) -> bool:
        return bool(self.staged or self.unstaged or self.conflicts)

    def categories(self) -> Dict[str, Tuple[str, ...]]:
        """Return the non-empty categories, for logging."""
        categories = {
            "staged": self.staged,
            "unstaged": self.unstaged,
            "conflicts": self.conflicts,
        }
        return {name: paths for name, paths in categories.items() if paths}


@dataclass(frozen=True)
class RepositorySnapshot:
    """Immutable view of a git working copy.

    Attributes:
        branch: Current branch name, or ``"HEAD"`` when detached.
        commit: Full hash of the HEAD commit.
        commit_abbrev: Abbreviated hash of the HEAD commit.
        commit_time: Commit time with its original UTC offset.
        current_tag: Tag sitting exactly on HEAD, if any.
        last_tag: Reachable tag with the highest number matching the
            last-tag pattern, if any.
        tags: Tags reachable from the branch tip, newest commit first.
        status: Categorized working-copy changes.
        dirty: Whether the working copy has staged or unstaged changes.
        shallow: Whether the history is truncated to HEAD.
    """

    branch: str
    commit: str
    commit_abbrev: str
    commit_time: Optional[datetime] = None
    current_tag: Optional[str] = None
    last_tag: Optional[str] = None
    tags: Tuple[str, ...] = ()
    status: FileStatus = field(default_factory=FileStatus)
    dirty: bool = False
    shallow: bool = False
