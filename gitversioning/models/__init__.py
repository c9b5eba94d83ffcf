"""
Unified data model exports for gitversioning.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``gitversioning.models`` instead of individual submodules.

Example:
    >>> from gitversioning.models import RelaxedVersion, VersionInfo
"""

from __future__ import annotations

from gitversioning.models.relaxed_version import RelaxedVersion
from gitversioning.models.release import ReleaseClassification
from gitversioning.models.snapshot import FileStatus, RepositorySnapshot
from gitversioning.models.version_info import (
    VersionInfo,
    VersionNumber,
    compute_version_code,
)

__all__ = [
    "RelaxedVersion",
    "ReleaseClassification",
    "FileStatus",
    "RepositorySnapshot",
    "VersionInfo",
    "VersionNumber",
    "compute_version_code",
]
