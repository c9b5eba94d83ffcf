"""
Git repository gateway for gitversioning.

The gateway is the only module that talks to git. It opens the working
copy with GitPython, captures everything the resolver needs in one
:class:`RepositorySnapshot` and closes the repository again, so the rest
of the package never touches the filesystem or spawns git processes.

Typical usage::

    gateway = GitRepositoryGateway(Path("."))
    if gateway.has_repository():
        snapshot = gateway.snapshot(branch_env=["BRANCH_NAME"])
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from git import Repo
from git.exc import BadName, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.objects import Commit

from gitversioning.constants import DEFAULT_LAST_TAG_PATTERN, DETACHED_HEAD
from gitversioning.core.tag_matcher import last_matching
from gitversioning.exceptions import NoCommitError, RepositoryError
from gitversioning.models.snapshot import FileStatus, RepositorySnapshot
from gitversioning.utils.logger import get_logger

logger = get_logger("gateway")

PathLike = Union[str, Path]

# Output of `git describe --tags --long`: <tag>-<count>-g<hash>
_DESCRIBE_REGEX = re.compile(r"^(.*)-(\d+)-g([0-9a-f]+)$")


def has_repository(root: PathLike) -> bool:
    """Return True if ``root`` is inside a git working copy."""
    try:
        with open_repository(root):
            return True
    except RepositoryError:
        return False


@contextmanager
def open_repository(root: PathLike) -> Iterator[Repo]:
    """Open the repository containing ``root`` and close it on exit.

    Raises:
        RepositoryError: ``root`` does not exist or is not in a git
            working copy.
    """
    try:
        repo = Repo(str(root), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        raise RepositoryError(
            "Not a git repository",
            path=str(root),
            original_error=exc,
        ) from exc

    try:
        yield repo
    finally:
        repo.close()


def get_snapshot(
    repo: Repo,
    *,
    branch_env: Sequence[str] = (),
    last_tag_pattern: str = DEFAULT_LAST_TAG_PATTERN,
    environ: Optional[Mapping[str, str]] = None,
) -> RepositorySnapshot:
    """Capture the state of ``repo``.

    Args:
        repo: Open repository.
        branch_env: Environment variables checked, in order, for the
            branch name before asking git.
        last_tag_pattern: Pattern selecting the last tag.
        environ: Environment to read, defaults to :data:`os.environ`.

    Returns:
        Snapshot of the branch, HEAD commit, tags and working copy status.

    Raises:
        NoCommitError: The repository has no commit yet.
        TagPatternError: ``last_tag_pattern`` has no number group.
    """
    if not repo.head.is_valid():
        raise NoCommitError(
            "No commit available in the repository - cannot compute version",
            path=repo.working_tree_dir,
        )

    env = os.environ if environ is None else environ
    head = repo.head.commit
    branch = _current_branch(repo, branch_env, env)
    shallow = _is_shallow(repo, head)

    tags = _reachable_tags(repo, branch)
    status = _file_status(repo)

    snapshot = RepositorySnapshot(
        branch=branch,
        commit=head.hexsha,
        commit_abbrev=repo.git.rev_parse(head.hexsha, short=True),
        commit_time=head.committed_datetime,
        current_tag=_current_tag(repo, head, shallow),
        last_tag=last_matching(last_tag_pattern, tags),
        tags=tuple(tags),
        status=status,
        dirty=repo.is_dirty(index=True, working_tree=True, untracked_files=False),
        shallow=shallow,
    )
    logger.debug(
        "Snapshot of %s: commit=%s shallow=%s dirty=%s tags=%d",
        branch,
        snapshot.commit_abbrev,
        shallow,
        snapshot.dirty,
        len(tags),
    )
    return snapshot


class GitRepositoryGateway:
    """Read-only access to the git working copy at ``root``.

    Args:
        root: Any directory inside the working copy.
        environ: Environment used for branch overrides, defaults to
            :data:`os.environ`.
    """

    def __init__(
        self,
        root: PathLike,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.root = Path(root)
        self.environ = environ

    def has_repository(self) -> bool:
        return has_repository(self.root)

    def snapshot(
        self,
        *,
        branch_env: Sequence[str] = (),
        last_tag_pattern: str = DEFAULT_LAST_TAG_PATTERN,
    ) -> RepositorySnapshot:
        """Open the repository, capture a snapshot and close it again."""
        with open_repository(self.root) as repo:
            return get_snapshot(
                repo,
                branch_env=branch_env,
                last_tag_pattern=last_tag_pattern,
                environ=self.environ,
            )


# ----------------------------------------------------------------------
# Internals
# ----------------------------------------------------------------------


def _current_branch(repo: Repo, branch_env: Sequence[str], environ: Mapping[str, str]) -> str:
    for name in branch_env:
        value = environ.get(name)
        if value:
            logger.debug("Branch %s taken from $%s", value, name)
            return value
    if repo.head.is_detached:
        return DETACHED_HEAD
    return repo.active_branch.name


def _is_shallow(repo: Repo, head: Commit) -> bool:
    """Return True when the parents of HEAD are not available.

    A depth-limited clone still has history when the cut-off lies below
    HEAD; only commits listed in ``shallow`` lack their parents, even
    though the commit object names them.
    """
    if not head.parents:
        return True
    shallow_file = Path(repo.common_dir) / "shallow"
    try:
        boundaries = shallow_file.read_text(encoding="ascii").split()
    except FileNotFoundError:
        return False
    return head.hexsha in boundaries


def _tags_by_commit(repo: Repo) -> Dict[str, List[str]]:
    tags: Dict[str, List[str]] = {}
    for ref in repo.tags:
        try:
            sha = ref.commit.hexsha
        except ValueError:
            # Tag pointing at a tree or blob
            logger.debug("Ignoring tag %s: not a commit", ref.name)
            continue
        tags.setdefault(sha, []).append(ref.name.strip())
    return tags


def _reachable_tags(repo: Repo, branch: str) -> List[str]:
    """Names of the tags reachable from the branch tip, newest first."""
    by_commit = _tags_by_commit(repo)
    if not by_commit:
        return []

    try:
        tip = repo.commit(branch)
    except (BadName, ValueError):
        # Branch taken from the environment may not exist locally
        tip = repo.head.commit

    reachable: List[str] = []
    for commit in repo.iter_commits(tip):
        reachable.extend(sorted(by_commit.get(commit.hexsha, ())))
    return reachable


def _current_tag(repo: Repo, head: Commit, shallow: bool) -> Optional[str]:
    if shallow:
        # describe needs history; only a tag on HEAD itself can be used
        on_head = sorted(_tags_by_commit(repo).get(head.hexsha, ()))
        return on_head[0] if on_head else None

    try:
        described = repo.git.describe(tags=True, long=True)
    except GitCommandError:
        # No tag in the history
        return None

    match = _DESCRIBE_REGEX.match(described.strip())
    if match is None:
        raise RepositoryError(
            f"Cannot parse description of current commit: {described}",
            path=repo.working_tree_dir,
        )
    tag, count, _ = match.groups()
    return tag if int(count) == 0 else None


def _diff_paths(diffs: Sequence) -> Tuple[str, ...]:
    return tuple(sorted({diff.b_path or diff.a_path for diff in diffs}))


def _file_status(repo: Repo) -> FileStatus:
    conflicts = tuple(sorted(repo.index.unmerged_blobs()))
    if conflicts:
        logger.warning("Unresolved merge conflicts: %s", ", ".join(conflicts))
    return FileStatus(
        staged=_diff_paths(repo.index.diff("HEAD")),
        unstaged=_diff_paths(repo.index.diff(None)),
        conflicts=conflicts,
    )
