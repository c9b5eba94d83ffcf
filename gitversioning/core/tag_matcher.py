"""
Tag filtering and ordering for gitversioning.

Tags are ordered by the number captured in the first group of a pattern,
never by string comparison or chronology: with ``^2\\.0\\.(\\d+)$``,
``2.0.10`` ranks before ``2.0.2``.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Union

from gitversioning.exceptions import TagPatternError
from gitversioning.models.relaxed_version import RelaxedVersion

TagPattern = Union[str, Pattern[str]]


def _compile(pattern: TagPattern) -> Pattern[str]:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise TagPatternError(
            f"Invalid tag pattern: {exc}",
            pattern=str(pattern),
        ) from exc

    if compiled.groups < 1:
        raise TagPatternError(
            "Tag pattern is expected to have at least one number grouping",
            pattern=compiled.pattern,
        )
    return compiled


def tag_number(pattern: TagPattern, tag: str) -> int:
    """Return the number captured by the first group of ``pattern``.

    Raises:
        TagPatternError: The pattern has no group, does not match ``tag``,
            or captured something that is not an integer.
    """
    compiled = _compile(pattern)
    match = compiled.search(tag)
    if match is None:
        raise TagPatternError(
            f"Tag {tag} should have matched the tag pattern",
            pattern=compiled.pattern,
            tag=tag,
        )

    captured = match.group(1)
    try:
        return int(captured)
    except (TypeError, ValueError) as exc:
        raise TagPatternError(
            f"Tag pattern first group must capture a number, got {captured!r}",
            pattern=compiled.pattern,
            tag=tag,
        ) from exc


def filter_and_sort(pattern: TagPattern, tags: Iterable[str]) -> List[str]:
    """Keep the tags matching ``pattern``, highest captured number first.

    Tags with equal numbers keep their original relative order.

    Args:
        pattern: Regular expression whose first group captures an integer.
        tags: Candidate tag names.

    Returns:
        Matching tags sorted by descending captured number.
    """
    compiled = _compile(pattern)
    matching = [tag for tag in tags if compiled.search(tag)]
    return sorted(matching, key=lambda tag: tag_number(compiled, tag), reverse=True)


def last_matching(pattern: TagPattern, tags: Iterable[str]) -> Optional[str]:
    """Return the matching tag with the highest number, if any."""
    ordered = filter_and_sort(pattern, tags)
    return ordered[0] if ordered else None


def with_tag_equivalents(tags: Iterable[str]) -> List[str]:
    """Expand ``MAJOR`` and ``MAJOR.MINOR`` tags to their equivalent forms.

    A ``2.0`` tag also counts as ``2.0.0``, so release branches continue
    numbering after it. Duplicates are dropped, first occurrence wins.
    """
    expanded: List[str] = []
    seen = set()
    for tag in tags:
        for name in RelaxedVersion.parse(tag).equivalents or (tag,):
            if name not in seen:
                seen.add(name)
                expanded.append(name)
    return expanded
