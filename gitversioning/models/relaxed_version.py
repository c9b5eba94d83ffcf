"""
Relaxed semantic version model for gitversioning.

Tags and branch names rarely follow Semantic Versioning to the letter:
``2.0``, ``v3``, ``2024.05`` or ``build-17`` all appear in real
repositories. :class:`RelaxedVersion` accepts all of them and never fails
on malformed input.

Parsing runs in two passes:

1. A relaxed grammar, read by a small scanner::

       [v]MAJOR[.MINOR[.PATCH]][-PRE.RELEASE][+BUILD.META]

   ``MINOR`` tolerates leading zeros so year-month versions such as
   ``2024.05`` keep their shape.
2. A coercion pass that extracts the first run of up to three
   dot-separated numbers from arbitrary text (``release-2.1`` -> ``2.1``).

When both passes fail the result is empty and every number reads as ``0``.

Example:
    >>> v = RelaxedVersion.parse("2.0-alpha")
    >>> v.relaxed_version(), v.strict_version()
    ('2.0-alpha', '2.0.0-alpha')
    >>> RelaxedVersion.parse("1").equivalents
    ('1.0.0', '1.0', '1')
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gitversioning.constants import MAX_VERSION_COMPONENT
from gitversioning.exceptions import VersionOverflowError

_DIGITS = frozenset("0123456789")
_IDENTIFIER_CHARS = frozenset(
    "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-."
)

# Up to three dot-separated groups of digits, bounded by non-digits
_COERCE_REGEX = re.compile(
    r"(?:^|\D)(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|\D)"
)

# 20YY.MM with an optional patch and qualifier
_YEAR_MONTH_REGEX = re.compile(r"20\d{2}\.(?:0[1-9]|1[0-2])(?:\.\d*)?(?:[-+].*)?")


def _is_numeric(text: str) -> bool:
    return bool(text) and all(char in _DIGITS for char in text)


def _is_strict_number(text: str) -> bool:
    """Return True for ``0`` or digits without a leading zero."""
    return _is_numeric(text) and (text == "0" or text[0] != "0")


def _is_pre_release_identifier(text: str) -> bool:
    # Numeric identifiers must not carry leading zeros
    return not _is_numeric(text) or _is_strict_number(text)


def _to_int(digits: Optional[str], version: str) -> Optional[int]:
    """Narrow a run of digits to a bounded integer."""
    if not digits:
        return None
    value = int(digits)
    if value > MAX_VERSION_COMPONENT:
        raise VersionOverflowError(
            "Version component exceeds the supported integer range",
            value=digits,
            version=version,
        )
    return value


class _Scanner:
    """Cursor over a version string for the relaxed grammar."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def accept(self, char: str) -> bool:
        if self.text.startswith(char, self.pos):
            self.pos += len(char)
            return True
        return False

    def digits(self) -> str:
        start = self.pos
        while not self.at_end() and self.text[self.pos] in _DIGITS:
            self.pos += 1
        return self.text[start : self.pos]

    def identifiers(self) -> Optional[List[str]]:
        """Read a dot-separated identifier list, or None if malformed."""
        start = self.pos
        while not self.at_end() and self.text[self.pos] in _IDENTIFIER_CHARS:
            self.pos += 1
        parts = self.text[start : self.pos].split(".")
        if not all(parts):
            return None
        return parts


_RelaxedParts = Tuple[str, Optional[str], Optional[str], List[str], List[str]]


def _scan_relaxed(text: str) -> Optional[_RelaxedParts]:
    """Match ``text`` against the relaxed grammar.

    Returns:
        ``(major, minor, patch, pre_release, build)`` as raw strings, or
        ``None`` when the text does not follow the grammar.
    """
    scanner = _Scanner(text)
    scanner.accept("v")

    major = scanner.digits()
    if not _is_strict_number(major):
        return None

    minor: Optional[str] = None
    patch: Optional[str] = None
    if scanner.accept("."):
        minor = scanner.digits()
        if not minor:
            return None
        if scanner.accept("."):
            patch = scanner.digits()
            if not _is_strict_number(patch):
                return None

    pre_release: List[str] = []
    if scanner.accept("-"):
        parsed = scanner.identifiers()
        if parsed is None or not all(_is_pre_release_identifier(p) for p in parsed):
            return None
        pre_release = parsed

    build: List[str] = []
    if scanner.accept("+"):
        parsed = scanner.identifiers()
        if parsed is None:
            return None
        build = parsed

    if not scanner.at_end():
        return None

    return major, minor, patch, pre_release, build


@dataclass(frozen=True)
class RelaxedVersion:
    """Parsed representation of a loosely-structured version string.

    Absent numbers are ``None`` here but count as ``0`` in
    :attr:`release` and :meth:`strict_version`; they are omitted from
    :meth:`relaxed_version`.

    Attributes:
        major: Major number, if present.
        minor: Minor number, if present.
        patch: Patch number, if present.
        pre_release: Dot-separated pre-release identifiers.
        build: Dot-separated build metadata identifiers.
        is_year_month: ``True`` for ``20YY.MM`` versions, rendered with a
            zero-padded month.
        is_relaxed_match: ``True`` when the relaxed grammar matched,
            ``False`` when the numbers were coerced out of free text.
    """

    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None
    pre_release: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()
    is_year_month: bool = False
    is_relaxed_match: bool = False

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: Optional[str]) -> "RelaxedVersion":
        """Parse ``text`` leniently; never fails on malformed input.

        Args:
            text: Version text, possibly ``None`` or blank.

        Returns:
            The parsed version; empty when nothing numeric was found.

        Raises:
            VersionOverflowError: A number exceeds the 32-bit signed range.
        """
        if text is None or not text.strip():
            return cls()

        version = text.strip()

        scanned = _scan_relaxed(version)
        if scanned is not None:
            major, minor, patch, pre_release, build = scanned
            relaxed_match = True
        else:
            coerced = _COERCE_REGEX.search(version)
            if coerced is None:
                return cls()
            major, minor, patch = coerced.groups()
            pre_release, build = [], []
            relaxed_match = False

        return cls(
            major=_to_int(major, version),
            minor=_to_int(minor, version),
            patch=_to_int(patch, version),
            pre_release=tuple(pre_release),
            build=tuple(build),
            is_year_month=bool(_YEAR_MONTH_REGEX.fullmatch(version)),
            is_relaxed_match=relaxed_match,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return (
            self.major is None
            and self.minor is None
            and self.patch is None
            and not self.pre_release
            and not self.build
        )

    def has_major(self) -> bool:
        return self.major is not None

    def has_minor(self) -> bool:
        return self.minor is not None

    def has_patch(self) -> bool:
        return self.patch is not None

    def is_strict_no_qualifier(self) -> bool:
        """Return True for a complete ``MAJOR.MINOR.PATCH`` without suffix."""
        return (
            self.major is not None
            and self.minor is not None
            and self.patch is not None
            and not self.qualifier
        )

    @property
    def release(self) -> Tuple[int, int, int]:
        """``(major, minor, patch)`` with absent numbers as ``0``."""
        return self.major or 0, self.minor or 0, self.patch or 0

    @property
    def qualifier(self) -> str:
        """Pre-release and build suffix exactly as rendered."""
        qualifier = ""
        if self.pre_release:
            qualifier += "-" + ".".join(self.pre_release)
        if self.build:
            qualifier += "+" + ".".join(self.build)
        return qualifier

    @property
    def equivalents(self) -> Tuple[str, ...]:
        """Expanded forms of a ``MAJOR`` or ``MAJOR.MINOR`` version.

        Empty for any version carrying a patch number or a qualifier.
        """
        if self.major is None or self.pre_release or self.build:
            return ()
        if self.minor is None:
            return (f"{self.major}.0.0", f"{self.major}.0", f"{self.major}")
        if self.patch is None:
            return (f"{self.major}.{self.minor}.0", f"{self.major}.{self.minor}")
        return ()

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def _format_numbers(self) -> str:
        if self.major is None:
            return ""
        text = str(self.major)
        if self.minor is not None:
            text += f".{self.minor:02d}" if self.is_year_month else f".{self.minor}"
            if self.patch is not None:
                text += f".{self.patch}"
        return text

    def relaxed_version(self) -> str:
        """Render only the numbers present, followed by the qualifier."""
        return self._format_numbers() + self.qualifier

    def strict_version(self) -> str:
        """Render ``MAJOR.MINOR.PATCH`` followed by the qualifier."""
        major, minor, patch = self.release
        return f"{major}.{minor}.{patch}{self.qualifier}"

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def with_qualifier(self, pre_release: str) -> "RelaxedVersion":
        """Return a copy whose qualifier is replaced by ``-pre_release``."""
        return RelaxedVersion.parse(f"{self._format_numbers()}-{pre_release}")

    def with_cleared_qualifier(self) -> "RelaxedVersion":
        """Return a copy without pre-release or build identifiers."""
        return RelaxedVersion.parse(self._format_numbers())

    def __str__(self) -> str:
        return self.strict_version()
