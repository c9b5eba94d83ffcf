"""
Helpers shared by gitversioning commands: console output, logging,
atomic file writes and PEP 440 conversion.
"""

from __future__ import annotations

from gitversioning.utils.console import (
    get_console,
    print_error,
    print_key_value_table,
    print_plain,
    print_success,
    print_warning,
    reset_console,
)
from gitversioning.utils.filesystem import resolve_output_path, write_text_atomic
from gitversioning.utils.logger import (
    disable_logging,
    get_logger,
    setup_logging,
    verbosity_level,
)
from gitversioning.utils.version_utils import local_label, to_pep440

__all__ = [
    # Console
    "get_console",
    "reset_console",
    "print_success",
    "print_warning",
    "print_error",
    "print_plain",
    "print_key_value_table",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "verbosity_level",
    # Files
    "resolve_output_path",
    "write_text_atomic",
    # Versions
    "to_pep440",
    "local_label",
]
