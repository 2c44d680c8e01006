"""
Utility helpers for verspan.

This package provides reusable utilities used across verspan, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from verspan.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
    setup_logging_for_verbosity,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from verspan.utils.filesystem import read_lines, safe_read_file

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from verspan.utils.console import (
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
    render_export,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "render_export",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_for_verbosity",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "read_lines",
]
