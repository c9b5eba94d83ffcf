"""
Rich console output for gitversioning commands.

Everything a command shows to its user goes through this module: status
lines (``[OK]``, ``[WARNING]``, ``[ERROR]``), verbatim version blocks and
the version table. Diagnostics go through :mod:`gitversioning.utils.logger`
instead, so they can be silenced with the log level.

Colors are off when ``NO_COLOR`` or ``CI`` is set, or when standard output
is not a terminal; the CLI calls :func:`reset_console` after changing
``NO_COLOR`` so the next output picks the new setting up.
"""

from __future__ import annotations

import os
import sys
from typing import Iterable, Mapping, Optional, Tuple

from rich.text import Text
from rich.table import Table
from rich.theme import Theme
from rich.console import Console

GITVERSIONING_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "key": "cyan",
        "version": "bold magenta",
        "dirty": "bold yellow",
    }
)

_console: Optional[Console] = None


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        # Replaced or closed stdout
        return False


def get_console() -> Console:
    """Return the shared console, creating it on first use."""
    global _console
    if _console is None:
        color = _color_enabled()
        _console = Console(theme=GITVERSIONING_THEME, no_color=not color, highlight=color)
    return _console


def reset_console() -> None:
    """Drop the shared console; the next output creates a fresh one."""
    global _console
    _console = None


def _status(prefix: str, message: str, style: str) -> None:
    get_console().print(f"{prefix} {message}", style=style)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _status(prefix, message, "success")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _status(prefix, message, "warning")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _status(prefix, message, "error")


def print_plain(text: str) -> None:
    """Write ``text`` exactly as given.

    Version blocks start with ``[version]``, which Rich would read as a
    markup tag, and must not be wrapped or highlighted.
    """
    get_console().print(text, markup=False, highlight=False, soft_wrap=True, end="")


def print_key_value_table(
    rows: Iterable[Tuple[str, str]],
    *,
    title: Optional[str] = None,
    value_styles: Optional[Mapping[str, str]] = None,
) -> None:
    """Render ``(key, value)`` pairs as a two-column table.

    Args:
        rows: Pairs in display order.
        title: Table title.
        value_styles: Theme style applied to the value of specific keys,
            e.g. ``{"display": "version"}``.
    """
    value_styles = value_styles or {}
    table = Table(title=title, header_style="bold")
    table.add_column("Key", style="key", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for key, value in rows:
        # Text cells are never parsed as markup
        table.add_row(Text(key), Text(value, style=value_styles.get(key, "")))

    if table.row_count:
        get_console().print(table)
