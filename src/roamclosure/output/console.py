"""Rich Console factory and theme for roamclosure output.

Consoles render into a StringIO buffer so rendering stays a pure
``ServiceResult -> str`` function. Outside a TTY (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROAM_THEME = Theme(
    {
        "roam.ok": "bold green",
        "roam.error": "bold red",
        "roam.warning": "bold yellow",
        "roam.op": "bold cyan",
        "roam.key": "dim",
        "roam.note": "bold",
        "roam.asset": "magenta",
        "roam.count": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ROAM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
