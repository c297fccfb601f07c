"""Rich consoles for folco.

Results are rendered into an in-memory buffer and returned as text, so the
command layer decides whether they go to stdout or stderr.  Live progress
is drawn straight onto stderr, leaving stdout clean for ``--json`` pipes.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from rich.console import Console
from rich.theme import Theme

FOLCO_THEME = Theme(
    {
        "folco.ok": "bold green",
        "folco.error": "bold red",
        "folco.warning": "bold yellow",
        "folco.op": "bold cyan",
        "folco.key": "dim",
        "folco.path": "blue",
        "folco.count.ok": "green",
        "folco.count.failed": "red",
        "folco.chain": "dim red",
    }
)

RESULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Buffered console for rendering one result; read it with :func:`get_output`."""
    return Console(
        file=StringIO(),
        theme=FOLCO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or RESULT_WIDTH,
    )


def create_progress_console() -> Console:
    """Unbuffered stderr console for the live progress bar."""
    return Console(stderr=True, theme=FOLCO_THEME, highlight=False)


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_field(key: str, value: Any) -> str:
    """Theme style for a ``key: value`` line of a batch summary."""
    if key == "path":
        return "folco.path"
    if key == "succeeded":
        return "folco.count.ok"
    if key == "failed" and value:
        return "folco.count.failed"
    return ""
