"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from radr.domain.slugs import format_number
from radr.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from radr.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
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
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(format_number(item["number"]) for item in items)
    if "path" in result.data:
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "radr.ok"), (f"  {result.op}", "radr.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="radr.key")
    if key in ("number", "supersedes", "superseded_by"):
        v = Text(format_number(int(value)), style="radr.number")
    elif key in ("path", "previous_path", "index_path"):
        v = Text(str(value), style="radr.path")
    elif key == "title":
        v = Text(str(value), style="radr.title")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}")
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _record_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Number", style="radr.number", no_wrap=True)
    table.add_column("Title", style="radr.title")
    table.add_column("Status")
    table.add_column("Date", no_wrap=True)
    for item in items:
        status = str(item.get("status", ""))
        table.add_row(
            format_number(item["number"]),
            str(item.get("title", "")),
            Text(status, style=style_for_status(status)),
            str(item.get("date", "")),
        )
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="radr.error"),
        Text(f"  {result.op}", style="radr.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/accept/reject/supersede/reformat results."""
    _status_line(console, result)
    for key in (
        "number",
        "title",
        "status",
        "date",
        "supersedes",
        "superseded_by",
        "format",
        "path",
        "previous_path",
        "relinked",
    ):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_records(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list and reformat_all results as a table."""
    items = result.data.get("items", [])
    console.print(_record_table(items))
    console.print(f"\n{result.data.get('count', len(items))} ADRs")
    if "index_path" in result.data:
        console.print(Text(f"Updated {result.data['index_path']}", style="radr.path"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "create": _render_record,
    "accept": _render_record,
    "reject": _render_record,
    "supersede": _render_record,
    "reformat": _render_record,
    "get": _render_record,
    "list": _render_records,
    "reformat_all": _render_records,
    "index": _render_generic,
}
