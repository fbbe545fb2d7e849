"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
User-supplied text (paths, patterns) is wrapped in ``Text`` so that
brackets in file names are never read as Rich markup.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from doomctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from doomctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]

_SIZE_UNITS = ("B", "K", "M", "G", "T", "P")
_AGE_UNITS = (("w", 7 * 86400), ("d", 86400), ("h", 3600), ("m", 60))


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: candidate paths only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    # Scans print one path per candidate, and nothing when there are none.
    if result.op == "scan":
        return "\n".join(str(item["path"]) for item in items or [])
    if items and isinstance(items, list):
        return "\n".join(str(item["path"]) for item in items if "path" in item)

    return f"OK: {result.op}"


def human_size(num_bytes: int) -> str:
    """Approximate binary size for display, e.g. ``150.0M``."""
    value = float(num_bytes)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{int(value)}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return f"{num_bytes}B"


def human_age(seconds: float) -> str:
    """Approximate age for display, e.g. ``8.0d``."""
    for unit, size in _AGE_UNITS:
        if seconds >= size:
            return f"{seconds / size:.1f}{unit}"
    return f"{int(seconds)}s"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="doom.ok")
    op = Text(f"  {result.op}", style="doom.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="doom.key")
    if key.endswith("path") or key == "doom_export":
        v = Text(str(value), style="doom.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _rule_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Age", style="doom.age")
    table.add_column("Size", style="doom.size")
    table.add_column("Name")
    table.add_column("Match", style="dim")
    for item in items:
        table.add_row(
            str(item.get("index", "")),
            Text(item.get("age") or "any"),
            Text(item.get("size") or "any"),
            Text(repr(item.get("name", ""))),
            Text(str(item.get("match", ""))),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="doom.error")
    op = Text(f"  {result.op}", style="doom.op")
    console.print(label, op, Text(": "), Text(msg))
    if err and err.code:
        console.print(Text(f"  code: {err.code}", style="dim"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_scan(result: ServiceResult, console: Console) -> None:
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    _status_line(console, result)
    _field(console, "doom_path", d.get("doom_path", ""))
    _field(console, "scanned", d.get("scanned", 0))
    _field(console, "candidates", d.get("count", len(items)))
    _field(console, "reclaimable", human_size(int(d.get("reclaimable_bytes", 0))))

    if items:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Path", style="doom.path", overflow="fold")
        table.add_column("Size", style="doom.size", justify="right")
        table.add_column("Age", style="doom.age", justify="right")
        table.add_column("Rules", style="dim")
        for item in items:
            table.add_row(
                Text(str(item["path"])),
                human_size(int(item["size_bytes"])),
                human_age(float(item["age_seconds"])),
                ",".join(str(i) for i in item.get("rules", [])),
            )
        console.print(table)


def _render_list_rules(result: ServiceResult, console: Console) -> None:
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    _status_line(console, result)
    _field(console, "policy", d.get("policy", ""))
    if not items:
        empty = Text("  No rules configured: nothing will be deleted.", style="doom.warning")
        console.print(empty)
        return
    console.print()
    console.print(_rule_table(items))


def _render_test_rule(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "name", d.get("name", ""))
    _field(console, "size", human_size(int(d.get("size_bytes", 0))))
    _field(console, "age", d.get("age", ""))
    matched = d.get("matched", [])
    _field(console, "matched_rules", ",".join(str(i) for i in matched) or "none")
    if d.get("delete"):
        console.print(Text("  DELETE", style="doom.delete"))
    else:
        console.print(Text("  KEEP", style="doom.keep"))


def _render_show_config(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("config_path", "doom_path", "doom_export", "circle", "policy"):
        if key in d:
            _field(console, key, d[key] if d[key] is not None else "(none)")
    rules = d.get("rules", [])
    if rules:
        console.print()
        console.print(_rule_table([{"index": i, **rule} for i, rule in enumerate(rules)]))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "scan": _render_scan,
    "list_rules": _render_list_rules,
    "test_rule": _render_test_rule,
    "show_config": _render_show_config,
}
