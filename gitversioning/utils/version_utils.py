"""
PEP 440 helpers for gitversioning.

Computed versions follow git conventions (``2.0.3-dirty``,
``1.0-sha-abc1234``) which Python packaging tools do not always accept.
These helpers turn them into PEP 440-compatible strings.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from packaging.version import InvalidVersion, Version

if TYPE_CHECKING:
    from gitversioning.models.version_info import VersionInfo

_LOCAL_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def to_pep440(info: "VersionInfo") -> str:
    """Return a PEP 440 version string for ``info``.

    The display version is used as is when ``packaging`` accepts it.
    Otherwise the numeric version is kept and the qualifier becomes a
    local version label.

    Examples:
        >>> to_pep440(info)  # display "2.0.3"
        '2.0.3'
        >>> to_pep440(info)  # display "1.0-sha-abc1234"
        '1.0.0+sha.abc1234'

    Returns:
        A string accepted by :class:`packaging.version.Version`, or ``""``
        for the empty info.
    """
    if info.is_empty() or not info.display:
        return ""

    try:
        return str(Version(info.display))
    except InvalidVersion:
        pass

    number = info.version_number
    unversioned = number is None or (
        number.version_code == 0 and not number.qualifier
    )
    if unversioned:
        release, label_source = "0.0.0", info.display
    else:
        release = f"{number.major}.{number.minor}.{number.patch}"
        label_source = number.qualifier or info.display

    label = local_label(label_source)
    return f"{release}+{label}" if label else release


def local_label(text: str) -> str:
    """Collapse ``text`` into a PEP 440 local version label.

    >>> local_label("-sha-abc1234-dirty")
    'sha.abc1234.dirty'
    """
    return _LOCAL_SEPARATORS.sub(".", text).strip(".").lower()
