"""Rich Console factory and theme for doomsday output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DD_THEME = Theme(
    {
        "dd.ok": "bold green",
        "dd.error": "bold red",
        "dd.warning": "bold yellow",
        "dd.op": "bold cyan",
        "dd.key": "dim",
        "dd.name": "bold blue",
        "dd.address": "dim",
        "dd.current": "bold green",
        "dd.insecure": "yellow",
        "dd.expired": "bold red",
        "dd.soon": "red",
        "dd.week": "yellow",
        "dd.month": "cyan",
        "dd.healthy": "green",
    }
)

_BUCKET_STYLES: dict[str, str] = {
    "expired": "dd.expired",
    "48h": "dd.soon",
    "7d": "dd.week",
    "28d": "dd.month",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_bucket(key: str) -> str:
    """Return the Rich style name for a dashboard bucket key."""
    return _BUCKET_STYLES.get(key, "")
