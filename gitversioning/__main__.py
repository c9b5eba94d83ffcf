"""
Executable module for gitversioning.

Running:
    python -m gitversioning

is equivalent to:
    gitversioning
"""

from __future__ import annotations

import sys

from gitversioning.cli import main

if __name__ == "__main__":
    sys.exit(main())
