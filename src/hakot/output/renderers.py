"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from hakot.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from hakot.services.result import ServiceResult


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

    schedule = result.data.get("schedule")
    if isinstance(schedule, dict):
        return "\n".join(schedule)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="hakot.ok")
    op = Text(f"  {result.op}", style="hakot.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="hakot.key")
    style = "hakot.driver" if key == "full_name" else ""
    console.print(k, Text(str(value), style=style), sep="")


def _coord(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return "—"


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _schedule_table(day: str, waypoints: list[dict[str, Any]]) -> Table:
    table = Table(
        title=Text(day, style="hakot.day"),
        title_justify="left",
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Stop")
    table.add_column("Latitude", justify="right", style="hakot.coord")
    table.add_column("Longitude", justify="right", style="hakot.coord")

    for position, waypoint in enumerate(waypoints, start=1):
        table.add_row(
            str(position),
            Text(str(waypoint.get("name") or "—")),
            _coord(waypoint.get("latitude")),
            _coord(waypoint.get("longitude")),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="hakot.error")
    op = Text(f"  {result.op}", style="hakot.op")
    console.print(label, op, Text(" — "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_schedule(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render login / assigned_schedule results as one table per day."""
    _status_line(console, result)
    _field(console, "full_name", result.data.get("full_name", ""))

    schedule: dict[str, list[dict[str, Any]]] = result.data.get("schedule") or {}
    if not schedule:
        console.print(Text("  No trucks assigned.", style="dim"))
    for day, waypoints in schedule.items():
        console.print()
        console.print(_schedule_table(day, waypoints))

    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "login": _render_schedule,
    "assigned_schedule": _render_schedule,
}
