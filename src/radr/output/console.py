"""Rich Console factory and theme for radr output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RADR_THEME = Theme(
    {
        "radr.ok": "bold green",
        "radr.error": "bold red",
        "radr.warning": "bold yellow",
        "radr.op": "bold cyan",
        "radr.key": "dim",
        "radr.number": "bold blue",
        "radr.path": "dim",
        "radr.title": "bold",
        "radr.status.proposed": "yellow",
        "radr.status.accepted": "green",
        "radr.status.rejected": "red",
        "radr.status.superseded": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=RADR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an ADR status text."""
    word = status.split(" ", 1)[0].lower()
    if word in ("proposed", "accepted", "rejected", "superseded"):
        return f"radr.status.{word}"
    return ""
