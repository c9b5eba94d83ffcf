"""
gitversioning - versions computed from git branches and tags

gitversioning derives a project version from the state of its git
working copy: the branch name selects a version base, existing tags
provide the next patch number, and the commit and working-copy status
decorate the result.

    >>> from gitversioning import Versioning
    >>> Versioning(".").info.display
    '2.0.3'
"""

from __future__ import annotations

from gitversioning.__version__ import __version__
from gitversioning.config import VersioningConfig, load_config
from gitversioning.core import Versioning, VersionResolver
from gitversioning.models import VersionInfo

__author__ = "gitversioning Contributors"
__license__ = "MIT"
__description__ = "Project versions computed from git branches and tags."

__all__ = [
    "__version__",
    "Versioning",
    "VersionResolver",
    "VersionInfo",
    "VersioningConfig",
    "load_config",
]
