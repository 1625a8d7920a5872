"""
Utility helpers for modgate.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem helpers for the manifest loader

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from modgate.utils.filesystem import list_subdirectories, safe_read_file
from modgate.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)
from modgate.utils.console import (
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_for_verbosity",
    # Filesystem
    "safe_read_file",
    "list_subdirectories",
]
