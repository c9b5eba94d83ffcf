"""
Errors raised while computing a version.

Every error derives from :class:`VersioningError`, so build scripts
embedding the resolver can catch one type. Context such as the branch,
tag or file involved is kept in ``details`` and shown after the message.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence


class VersioningError(Exception):
    """Root of the gitversioning errors.

    ``str()`` renders the message followed by ``key=value`` pairs from
    ``details``, e.g. ``Cannot write out.env (path=out.env, operation=write)``.

    Args:
        message: What went wrong.
        details: Context values, empty entries are left out by subclasses.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


class ConfigError(VersioningError):
    """Raised when the configuration file or an option value is invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class RepositoryError(VersioningError):
    """Raised when the git repository cannot be opened or read.

    Args:
        message: Error description.
        path: Directory the repository was looked up from.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("path", "original_error")

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", path)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.path = path
        self.original_error = original_error


class NoCommitError(RepositoryError):
    """Raised when the repository has no commit to compute a version from."""

    __slots__ = ()


class DirtyWorkingTreeError(VersioningError):
    """Raised when a release branch has local changes and the policy forbids it.

    Args:
        message: Error description.
        branch: Branch being versioned.
        staged: Paths with staged changes.
        unstaged: Paths with unstaged changes.
        conflicts: Paths with unresolved merge conflicts.
    """

    __slots__ = ("branch", "staged", "unstaged", "conflicts")

    def __init__(
        self,
        message: str = "Dirty working copy - cannot compute a release version",
        *,
        branch: Optional[str] = None,
        staged: Sequence[str] = (),
        unstaged: Sequence[str] = (),
        conflicts: Sequence[str] = (),
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "branch", branch)
        changed = len(staged) + len(unstaged) + len(conflicts)
        if changed:
            details["changes"] = changed

        super().__init__(message, details)

        self.branch = branch
        self.staged = tuple(staged)
        self.unstaged = tuple(unstaged)
        self.conflicts = tuple(conflicts)


class TagPatternError(VersioningError):
    """Raised when a tag pattern does not provide a numeric first group.

    Args:
        message: Error description.
        pattern: Regular expression used to match tags.
        tag: Tag name that exposed the problem.
    """

    __slots__ = ("pattern", "tag")

    def __init__(
        self,
        message: str,
        *,
        pattern: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "pattern", pattern)
        _add_if(details, "tag", tag)

        super().__init__(message, details)

        self.pattern = pattern
        self.tag = tag


class VersionOverflowError(VersioningError):
    """Raised when a version component does not fit a 32-bit integer.

    Args:
        message: Error description.
        value: Digits that could not be narrowed.
        version: Full version text being parsed.
    """

    __slots__ = ("value", "version")

    def __init__(
        self,
        message: str,
        *,
        value: Optional[str] = None,
        version: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "value", value)
        _add_if(details, "version", version)

        super().__init__(message, details)

        self.value = value
        self.version = version


class FileOperationError(VersioningError):
    """Raised when a version file cannot be written.

    Args:
        message: Error description.
        file_path: Target file.
        operation: ``"write"`` for version files.
        original_error: The underlying ``OSError``.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
