"""
gitversioning version information.

Single source of truth for the package version, read by ``pyproject.toml``
and the ``--version`` option.
"""

from __future__ import annotations

__version__ = "0.1.0"

VERSION_STRING = f"gitversioning {__version__}"
