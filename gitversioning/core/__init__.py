"""
Core functionality exports for gitversioning.

Importing from here keeps user-facing imports clean and stable:

    from gitversioning.core import Versioning, VersionResolver
"""

from __future__ import annotations

from gitversioning.core.formatter import format_version_text, version_rows
from gitversioning.core.gateway import GitRepositoryGateway, get_snapshot, has_repository, open_repository
from gitversioning.core.modes import DisplayMode, ReleaseMode
from gitversioning.core.presets import cloud_preset, edge_preset
from gitversioning.core.resolver import VersionResolver, normalize_branch
from gitversioning.core.tag_matcher import filter_and_sort, last_matching, tag_number, with_tag_equivalents
from gitversioning.core.versioning import Versioning

__all__ = [
    "Versioning",
    "VersionResolver",
    "GitRepositoryGateway",
    "has_repository",
    "open_repository",
    "get_snapshot",
    "DisplayMode",
    "ReleaseMode",
    "cloud_preset",
    "edge_preset",
    "normalize_branch",
    "filter_and_sort",
    "last_matching",
    "tag_number",
    "with_tag_equivalents",
    "format_version_text",
    "version_rows",
]
