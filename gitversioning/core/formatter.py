"""
Output formatting for computed versions.

Two textual forms are produced from a :class:`VersionInfo`:

* the human form, one aligned ``key = value`` line per output key::

      [version] build       = abc1234
      [version] branch      = release/2.0

* the machine form, a properties file readable by shells and CI tools::

      VERSION_BUILD=abc1234
      VERSION_BRANCH=release/2.0
      VERSION_LAST_TAG=2.0.2

Both list the keys in the order of :meth:`VersionInfo.to_dict`.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from gitversioning.constants import (
    DEFAULT_DISPLAY_PREFIX,
    DEFAULT_FILE_PREFIX,
    DISPLAY_KEY_WIDTH,
)
from gitversioning.models.version_info import VersionInfo

_PROPERTY_NAMES = {"lastTag": "LAST_TAG"}


def format_value(value: Any) -> str:
    """Render a single output value.

    Booleans are lower-case, ``None`` is empty.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def property_name(key: str) -> str:
    """Turn an output key into a property name.

    Keys are upper-cased as is; only ``lastTag`` is split, as existing
    build scripts read ``LAST_TAG``.

    >>> property_name("lastTag"), property_name("branchId")
    ('LAST_TAG', 'BRANCHID')
    """
    return _PROPERTY_NAMES.get(key, key.upper())


def format_version_text(
    info: VersionInfo,
    prefix: str = "",
    machine: bool = False,
) -> str:
    """Render ``info`` in the human or the machine form.

    Args:
        info: Computed version information.
        prefix: Line prefix. When empty the form's default is used:
            ``"[version] "`` for humans, ``"VERSION_"`` for machines.
        machine: Produce ``PREFIX_KEY=value`` lines instead of aligned
            ``key = value`` lines.

    Returns:
        Newline-terminated text. For the empty info the human form is a
        single notice line and the machine form is empty.
    """
    if machine:
        prefix = prefix or DEFAULT_FILE_PREFIX
        if info.is_empty():
            return ""
        lines = [
            f"{prefix}{property_name(key)}={format_value(value)}"
            for key, value in info.to_dict().items()
        ]
    else:
        prefix = prefix or DEFAULT_DISPLAY_PREFIX
        if info.is_empty():
            return f"{prefix}No version can be computed from the SCM.\n"
        lines = [
            f"{prefix}{key:<{DISPLAY_KEY_WIDTH}}= {format_value(value)}"
            for key, value in info.to_dict().items()
        ]
    return "\n".join(lines) + "\n"


def version_rows(info: VersionInfo) -> List[Tuple[str, str]]:
    """Return ``(key, value)`` pairs for table rendering."""
    return [(key, format_value(value)) for key, value in info.to_dict().items()]
