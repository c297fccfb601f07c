"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from folco.output.console import create_console, get_output, style_for_field

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from folco.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="folco.ok")
    op = Text(f"  {result.op}", style="folco.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    key_text = Text(f"  {key}: ", style="folco.key")
    console.print(key_text, Text(str(value), style=style_for_field(key, value)), sep="")


def _render_failures(console: Console, failures: list[dict[str, Any]], *, verbose: bool) -> None:
    if not failures:
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("  directory", style="folco.path", no_wrap=True)
    table.add_column("error")
    for failure in failures:
        message = failure["message"]
        if verbose:
            message = ": ".join(failure.get("chain") or [message])
        table.add_row(f"  {failure['path']}", message)
    console.print(table)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("total", "succeeded", "failed"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_schema(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(result.data.get("schema", ""), markup=False, emoji=False, soft_wrap=True)


def _render_colors(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("  color")
    table.add_column("hue", justify="right")
    table.add_column("saturation", justify="right")
    table.add_column("lightness", justify="right")
    for item in result.data.get("items", []):
        table.add_row(
            f"  {item['name']}",
            f"{item['hue_shift']:+g}",
            f"{item['saturation_shift']:+g}",
            f"{item['lightness_shift']:+g}",
        )
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="folco.error")
    op = Text(f"  {result.op}", style="folco.op")
    if result.error is not None:
        message = Text(f"  {result.error.describe(verbose=verbose)}")
    else:
        message = Text("  Unknown error")
    console.print(label, op, message, sep="")
    for key in ("total", "succeeded", "failed"):
        if key in result.data:
            _field(console, key, result.data[key])
    _render_failures(console, result.data.get("failures", []), verbose=verbose)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "customize": _render_batch,
    "reset": _render_batch,
    "schema": _render_schema,
    "colors": _render_colors,
}
