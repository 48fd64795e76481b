"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from replacer.output.console import create_console, get_output, style_for_kind, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from replacer.services.result import ServiceResult


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
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("key", "")) for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="rp.ok")
    op = Text(f"  {result.op}", style="rp.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rp.key")
    if key in ("path", "written_to"):
        v = Text(str(value), style="rp.path")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _marker_table(markers: list[dict[str, Any]]) -> Table:
    """Build a table of scanned markers with their resolution status."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Col", justify="right", no_wrap=True)
    table.add_column("Key", style="rp.name")
    table.add_column("Kind")
    table.add_column("Status")

    for marker in markers:
        kind = str(marker.get("kind", ""))
        status = str(marker.get("status", ""))
        table.add_row(
            str(marker.get("line", "")),
            str(marker.get("column", "")),
            Text(str(marker.get("key", ""))),
            Text(kind, style=style_for_kind(kind)),
            Text(status, style=style_for_status(status)),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rp.error")
    op = Text(f"  {result.op}", style="rp.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err is None:
        return

    # Check failures carry the full marker report.
    markers = err.detail.get("items")
    if isinstance(markers, list):
        problems = markers if verbose else [m for m in markers if m.get("status") != "ok"]
        if problems:
            console.print(_marker_table(problems))
        malformed = err.detail.get("malformed")
        if malformed:
            line = Text("  ")
            line.append("malformed", style="rp.error")
            line.append(f" {malformed['line']}:{malformed['column']}: {malformed['message']}")
            console.print(line)
        return

    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_render(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render results written to a file; stdout renders are emitted raw by the CLI."""
    _status_line(console, result)
    for key in ("path", "written_to", "substitutions"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    count = result.data.get("count", 0)
    _field(console, "markers", count)
    if verbose and count:
        console.print(_marker_table(result.data.get("items", [])))


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("[rp.warning]No rules configured.[/rp.warning]")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="rp.name", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Value")
    for item in items:
        kind = str(item.get("kind", ""))
        table.add_row(
            Text(str(item.get("key", ""))),
            Text(kind, style=style_for_kind(kind)),
            Text(str(item.get("value", ""))),
        )
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "render": _render_render,
    "check": _render_check,
    "rules": _render_rules,
}
