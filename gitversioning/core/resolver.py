"""Version resolution for gitversioning.

:class:`VersionResolver` turns a :class:`RepositorySnapshot` into a
:class:`VersionInfo`. It is a pure function of the snapshot and the
configuration: no git access, no environment lookup, no mutable state.

The outcome depends on how the branch is classified:

1. **Not auto-versioned** (no version base): the display version comes
   from the display strategy, by default the last tag qualified with the
   commit (``2.0.2-sha-abc1234``) or the full build identifier
   (``feature-x-sha-abc1234``).
2. **Auto-versioned, shallow history**: the next tag number cannot be
   computed, so the tag on HEAD is reused, otherwise the base becomes a
   snapshot (``2.0.0-SNAPSHOT``).
3. **Auto-versioned, full history**: the highest existing tag for the
   base is incremented (``2.0.2`` -> ``2.0.3``), or a CI build number is
   used in build-number mode.

A dirty working copy either aborts resolution on release branches (when
configured) or adds the dirty suffix to ``full`` and ``display``.

Typical usage::

    resolver = VersionResolver(VersioningConfig(base_version="2.0"))
    info = resolver.resolve(snapshot)
    print(info.display)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from gitversioning.config import VersioningConfig
from gitversioning.constants import PRE_RELEASE_PREFIX, SCM_GIT
from gitversioning.core.modes import (
    DisplayContext,
    ReleaseContext,
    resolve_display_mode,
    resolve_release_mode,
)
from gitversioning.core.tag_matcher import (
    filter_and_sort,
    tag_number,
    with_tag_equivalents,
)
from gitversioning.exceptions import DirtyWorkingTreeError
from gitversioning.models.relaxed_version import RelaxedVersion
from gitversioning.models.release import ReleaseClassification
from gitversioning.models.snapshot import RepositorySnapshot
from gitversioning.models.version_info import VersionInfo, VersionNumber
from gitversioning.utils.logger import get_logger

logger = get_logger("resolver")

_NORMALIZE_REGEX = re.compile(r"[^A-Za-z0-9._-]")


def normalize_branch(branch: str) -> str:
    """Replace characters unsafe in versions and file names with ``-``."""
    return _NORMALIZE_REGEX.sub("-", branch)


def tag_number_pattern(base: RelaxedVersion, base_text: str) -> str:
    """Build the pattern locating tags derived from a version base.

    * qualified base (``2.0-alpha``): ``2.0-alpha.N`` or ``2.0.0-alpha.N``
    * major-only base (``2``): ``2.N`` or ``2.N.P``
    * complete base (``2.0.0``): ``2.0.0-N``
    * otherwise (``2.0``): ``2.0.N``

    The first group always captures ``N``.
    """
    if base.qualifier:
        alternatives = {re.escape(base.relaxed_version()), re.escape(base.strict_version())}
        return rf"^(?:{'|'.join(sorted(alternatives))})\.(\d+)$"
    if base.has_major() and not base.has_minor():
        return rf"^{base.major}\.(\d+)(?:\.\d+)?$"
    separator = "-" if base.is_strict_no_qualifier() else r"\."
    return rf"^{re.escape(base_text)}{separator}(\d+)$"


@dataclass(frozen=True)
class _Outcome:
    """Display text and semantic version produced by a branch outcome."""

    display: str
    semantic: RelaxedVersion


class VersionResolver:
    """Compute :class:`VersionInfo` from a snapshot and a configuration.

    Args:
        config: Versioning configuration. Mode options are validated on
            construction.

    Raises:
        ConfigError: The display or release mode is invalid.
    """

    def __init__(self, config: Optional[VersioningConfig] = None) -> None:
        self.config: VersioningConfig = config or VersioningConfig()
        self._display_strategy = resolve_display_mode(self.config.display_mode)
        self._release_strategy = resolve_release_mode(self.config.release_mode)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, snapshot: RepositorySnapshot) -> ReleaseClassification:
        """Classify the snapshot's branch with the configured parser."""
        parser = self.config.branch_parser
        if parser is not None:
            return parser(snapshot, self.config.separator)
        return ReleaseClassification.from_branch(snapshot.branch, self.config.separator)

    def resolve(
        self,
        snapshot: RepositorySnapshot,
        *,
        build_number: Optional[str] = None,
        project_version: Optional[str] = None,
    ) -> VersionInfo:
        """Compute the version of ``snapshot``.

        Args:
            snapshot: Repository state captured by the gateway.
            build_number: CI build number, used in build-number mode.
            project_version: Overrides the configured project version.

        Returns:
            The fully populated version information.

        Raises:
            DirtyWorkingTreeError: The working copy is dirty on a release
                branch and ``dirty_fail_on_releases`` is set.
            TagPatternError: A tag pattern lacks its number group.
            VersionOverflowError: A version number is out of range.
        """
        config = self.config
        classification = self.classify(snapshot)
        branch_id = normalize_branch(snapshot.branch)
        is_release = classification.branch_type in config.release_branches

        if snapshot.dirty:
            self._check_dirty(snapshot, classification, is_release)

        base = self._version_base(classification, project_version)
        full = f"{branch_id}-{PRE_RELEASE_PREFIX}{snapshot.commit_abbrev}"

        if not base:
            outcome = self._unversioned_outcome(snapshot, classification, branch_id, full)
        elif snapshot.shallow:
            outcome = self._shallow_outcome(snapshot, base)
        else:
            outcome = self._tagged_outcome(
                snapshot,
                base,
                branch_id,
                is_release=is_release,
                build_number=build_number,
            )

        if snapshot.dirty:
            full += config.dirty_suffix

        logger.debug(
            "Resolved %s (type=%s, base=%r) to %s",
            snapshot.branch,
            classification.branch_type,
            base,
            outcome.display,
        )

        return VersionInfo(
            scm=SCM_GIT,
            branch=snapshot.branch,
            branch_type=classification.branch_type,
            branch_id=branch_id,
            commit=snapshot.commit,
            commit_abbrev=snapshot.commit_abbrev,
            time=snapshot.commit_time.isoformat() if snapshot.commit_time else None,
            current_tag=snapshot.current_tag,
            last_tag=snapshot.last_tag,
            dirty=snapshot.dirty,
            shallow=snapshot.shallow,
            base=base,
            full=full,
            display=outcome.display,
            version_number=VersionNumber.from_version(outcome.semantic, config.precision),
        )

    # ------------------------------------------------------------------
    # Version base
    # ------------------------------------------------------------------

    def semantic_project_version(
        self, project_version: Optional[str] = None
    ) -> Optional[RelaxedVersion]:
        """Return the project version if it is a complete semantic version."""
        if project_version is None:
            project_version = self.config.project_version
        version = RelaxedVersion.parse(project_version)
        if version.has_major() and version.has_minor() and version.has_patch():
            return version
        return None

    def _version_base(
        self,
        classification: ReleaseClassification,
        project_version: Optional[str] = None,
    ) -> str:
        config = self.config
        branch_type = classification.branch_type

        if config.build_number_mode:
            semantic = self.semantic_project_version(project_version)
            if semantic is not None:
                return semantic.with_cleared_qualifier().relaxed_version()

        if branch_type in config.release_branches and classification.version_base:
            return classification.version_base.strip()

        auto_versioned = branch_type in config.release_branches or branch_type in config.trunk_branches
        if auto_versioned and config.base_version and config.base_version.strip():
            return config.base_version.strip()

        return ""

    # ------------------------------------------------------------------
    # Branch outcomes
    # ------------------------------------------------------------------

    def _unversioned_outcome(
        self,
        snapshot: RepositorySnapshot,
        classification: ReleaseClassification,
        branch_id: str,
        full: str,
    ) -> _Outcome:
        config = self.config
        context = DisplayContext(
            classification=classification,
            branch_id=branch_id,
            commit_abbrev=snapshot.commit_abbrev,
            full=full,
            last_tag=snapshot.last_tag,
            snapshot_suffix=config.snapshot_suffix,
        )
        display = str(self._display_strategy(context))
        if snapshot.dirty:
            display += config.dirty_suffix

        semantic = RelaxedVersion()
        tag_version = RelaxedVersion.parse(snapshot.last_tag)
        if not tag_version.is_empty():
            pre_release = context.commit_pre_release
            if snapshot.dirty:
                pre_release += config.dirty_suffix
            semantic = tag_version.with_qualifier(pre_release)

        return _Outcome(display, semantic)

    def _shallow_outcome(self, snapshot: RepositorySnapshot, base: str) -> _Outcome:
        config = self.config
        logger.info(
            "Shallow history: the next tag number cannot be computed for base %s",
            base,
        )
        if config.release_build and snapshot.current_tag:
            text = snapshot.current_tag
        else:
            text = f"{base}{config.snapshot_suffix}"
        return self._rendered(text, RelaxedVersion.parse(base), dirty=snapshot.dirty)

    def _tagged_outcome(
        self,
        snapshot: RepositorySnapshot,
        base: str,
        branch_id: str,
        *,
        is_release: bool,
        build_number: Optional[str],
    ) -> _Outcome:
        config = self.config
        base_version = RelaxedVersion.parse(base)
        base_text = base_version.relaxed_version() or base
        pattern = tag_number_pattern(base_version, base_text)

        last_tag: Optional[str] = None
        candidates = filter_and_sort(pattern, with_tag_equivalents(snapshot.tags))
        if candidates:
            last_tag = candidates[0]
            next_number = str(tag_number(pattern, last_tag) + 1)
        else:
            next_number = "0"
        logger.debug("Tag pattern %s matched %s, next number %s", pattern, last_tag, next_number)

        use_build_number = config.build_number_mode and bool(build_number)
        if config.build_number_mode and not build_number:
            logger.warning(
                "Build-number mode is enabled but no build number was supplied; "
                "using the next tag number %s",
                next_number,
            )
        if use_build_number:
            next_number = str(build_number).strip()

        if use_build_number and not is_release:
            next_version = f"{base_text}-{branch_id}.{next_number}"
        else:
            separator = "-" if base_version.is_strict_no_qualifier() else "."
            next_version = f"{base_text}{separator}{next_number}"

        context = ReleaseContext(
            next_version=next_version,
            last_tag=last_tag,
            current_tag=snapshot.current_tag,
            release_build=config.release_build,
            snapshot_suffix=config.snapshot_suffix,
        )
        text = str(self._release_strategy(context))
        return self._rendered(text, base_version, dirty=snapshot.dirty)

    def _rendered(self, text: str, base_version: RelaxedVersion, *, dirty: bool) -> _Outcome:
        """Render ``text`` strictly, or relaxed in build-number mode.

        Text the relaxed grammar rejects is kept as is when the base was a
        valid version (``2.0.0-feature-foo_bar.12``); only a meaningless
        base is reduced to its coerced numbers. The dirty suffix is
        appended to the rendered text.
        """
        version = RelaxedVersion.parse(text)
        if version.is_empty() or (not version.is_relaxed_match and base_version.is_relaxed_match):
            display = text
        elif self.config.build_number_mode:
            display = version.relaxed_version()
        else:
            display = version.strict_version()

        if dirty:
            display += self.config.dirty_suffix
            dirty_version = RelaxedVersion.parse(display)
            if dirty_version.is_relaxed_match:
                version = dirty_version
        return _Outcome(display, version)

    # ------------------------------------------------------------------
    # Dirty working copy
    # ------------------------------------------------------------------

    def _check_dirty(
        self,
        snapshot: RepositorySnapshot,
        classification: ReleaseClassification,
        is_release: bool,
    ) -> None:
        config = self.config
        fail = config.dirty_fail_on_releases and is_release

        if (config.dirty_status_log or fail) and snapshot.status.has_changes():
            logger.warning("Git status of %s:", snapshot.branch)
            for category, paths in snapshot.status.categories().items():
                logger.warning("%s [\n\t%s\n]", category, "\n\t".join(paths))

        if fail:
            raise DirtyWorkingTreeError(
                branch=snapshot.branch,
                staged=snapshot.status.staged,
                unstaged=snapshot.status.unstaged,
                conflicts=snapshot.status.conflicts,
            )

        if not config.no_warning_on_dirty:
            logger.warning(
                "The working copy has un-staged or un-committed changes (branch type %s)",
                classification.branch_type or "<none>",
            )
