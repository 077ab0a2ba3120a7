"""
Terminal output for depsplit, built on Rich.

Two consoles are kept: one on stdout for tables, and one on stderr for
status messages. Reports, DOT and JSON are echoed by the commands
themselves, so stdout carries nothing else and can be piped into ``dot``
or ``jq``. Diagnostics belong in :mod:`depsplit.utils.logger`.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

DEPSPLIT_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
    }
)

#: Rich color per node category value (see :mod:`depsplit.models.category`).
CATEGORY_COLORS: Dict[str, str] = {
    "leverage-point": "blue",
    "conflict-root": "red",
    "conflict-descendant": "dark_orange",
    "minority-adjacent": "yellow",
}

# Keyed by stream: False for stdout, True for stderr
_consoles: Dict[bool, Console] = {}
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """False under ``NO_COLOR`` or ``CI``, or when stdout is not a TTY."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _console_for(stderr: bool) -> Console:
    with _console_lock:
        console = _consoles.get(stderr)
        if console is None:
            use_color = _should_use_color()
            console = Console(
                theme=DEPSPLIT_THEME,
                no_color=not use_color,
                highlight=use_color and not stderr,
                stderr=stderr,
            )
            _consoles[stderr] = console
        return console


def _get_console() -> Console:
    """Return the shared stdout console."""
    return _console_for(stderr=False)


def _get_err_console() -> Console:
    """Return the shared stderr console."""
    return _console_for(stderr=True)


def reconfigure_console() -> None:
    """Forget both consoles so the next call picks up a new ``NO_COLOR``."""
    with _console_lock:
        _consoles.clear()


# ---------------------------------------------------------------------------
# Status messages (stderr)
# ---------------------------------------------------------------------------


def _status(message: str, prefix: str, style: str) -> None:
    # markup=False: lockfile text such as "[[package]]" must print verbatim
    _get_err_console().print(f"{prefix} {message}", style=style, markup=False)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _status(message, prefix, "success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    _status(message, prefix, "error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _status(message, prefix, "warning")


# ---------------------------------------------------------------------------
# Tables (stdout)
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    show_row_lines: bool = False,
) -> None:
    """Render rows of a dictionary list as a Rich table.

    Cell values may contain Rich markup.

    Args:
        data: One dictionary per row.
        headers: Columns to show, in order; defaults to the first row's keys.
        title: Table title.
        column_styles: Per-column keyword arguments for ``Table.add_column``
            (``style``, ``justify``, ``no_wrap``, ``width``, ``overflow``).
        show_row_lines: Draw a rule between rows.
    """
    if not data:
        return

    columns = headers if headers is not None else list(data[0])
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
        show_lines=show_row_lines,
    )

    styles = column_styles or {}
    for column in columns:
        options = {"justify": "default", "overflow": "fold"}
        options.update(styles.get(column, {}))
        table.add_column(column, **options)

    for row in data:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    _get_console().print(table)


def colorize_category(category: str) -> str:
    """Wrap a node category value in its Rich color markup.

    Categories without a color (``unaffected``) are returned unchanged.
    """
    color = CATEGORY_COLORS.get(category.lower())
    return f"[{color}]{category}[/{color}]" if color else category
