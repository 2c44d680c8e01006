"""
Console output utilities for verspan using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`verspan.utils.logger`.

Guidelines:
- print_* functions: user-facing status messages
- print_table: structured CLI output
- render_* functions: Rich markup for domain values
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.markup import escape
from rich.console import Console

from verspan.models.constraint import ExportResult, MatchSentinel

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

VERSPAN_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "allowed": "green",
        "reject": "red",
        "sentinel": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    """Return a singleton Rich Console instance."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color()
                _console = Console(
                    theme=VERSPAN_THEME,
                    no_color=not use_color,
                    highlight=False,
                )
    return _console


def get_raw_console() -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console()


def reconfigure_console() -> None:
    """Reset the global console instance.

    Useful if environment variables (e.g. NO_COLOR) change at runtime.
    """
    global _console
    with _console_lock:
        _console = None


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_console().print(f"{escape(prefix)} {message}", style="success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    _get_console().print(f"{escape(prefix)} {message}", style="error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _get_console().print(f"{escape(prefix)} {message}", style="warning")


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        column_styles: Per-column style configuration.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)


# ---------------------------------------------------------------------------
# Domain rendering
# ---------------------------------------------------------------------------


def render_export(result: ExportResult) -> Dict[str, str]:
    """Return Rich markup for the allowed range and rejects of ``result``.

    Returns:
        A dict with ``"allowed"`` and ``"rejects"`` markup strings.
    """
    if isinstance(result, MatchSentinel):
        label = "always" if result is MatchSentinel.ALWAYS_MATCH else "never"
        return {"allowed": f"[sentinel]{label}[/sentinel]", "rejects": "-"}

    rejects = ", ".join(
        f"[reject]{escape(text)}[/reject]" for text in result.reject_texts
    )
    return {
        "allowed": f"[allowed]{escape(result.allowed_text)}[/allowed]",
        "rejects": rejects or "-",
    }
