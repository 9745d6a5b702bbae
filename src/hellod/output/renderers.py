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

from hellod.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from hellod.services.result import ServiceResult

_Renderer = Callable[..., None]

# The one value --quiet prints per op.
_QUIET_KEYS: dict[str, str] = {
    "serve": "url",
    "probe": "status",
}


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
    key = _QUIET_KEYS.get(result.op)
    if key is None:
        return ""
    return str(result.data.get(key, ""))


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="hellod.ok"), Text(f"  {result.op}", style="hellod.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="hellod.key")
    if key == "url":
        v = Text(str(value), style="hellod.url")
    elif key == "status":
        v = Text(str(value), style="hellod.status")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose and result.meta:
        console.print(Text("  meta:", style="hellod.key"))
        for key, value in result.meta.items():
            console.print(f"    {key}: {value}")


def _render_config(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Flatten the settings dump into a two-column table."""
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("setting", style="hellod.key")
    table.add_column("value")
    for key, value in _flatten(result.data):
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(
        Text("ERROR", style="hellod.error"),
        Text(": "),
        Text(result.op, style="hellod.op"),
        Text(f" — {msg}"),
        sep="",
    )
    if verbose and result.error:
        _field(console, "code", result.error.code)
        for key, value in result.error.detail.items():
            _field(console, key, value)


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, prefix=f"{name}."))
        else:
            rows.append((name, value))
    return rows


_OP_RENDERERS: dict[str, _Renderer] = {
    "config": _render_config,
}
