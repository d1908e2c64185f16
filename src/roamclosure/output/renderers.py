"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from roamclosure.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from roamclosure.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render ``--quiet`` output: one path per line, notes then assets.

    Meant for piping into ``xargs``, ``tar -T -`` or ``rsync --files-from``.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    paths = [*result.data.get("notes", []), *result.data.get("assets", [])]
    return "\n".join(str(p) for p in paths)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="roam.ok"), Text(f"  {result.op}", style="roam.op"))


def _path_table(title: str, paths: list[str], style: str) -> Table:
    table = Table(title=title, show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style=style, overflow="fold")
    for i, path in enumerate(paths, start=1):
        table.add_row(str(i), Text(path))
    return table


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="roam.error"),
        Text(f"  {result.op}", style="roam.op"),
        Text(" — "),
        Text(msg),
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Closure renderers ─────────────────────────────────────────────────


def _render_closure(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Notes table in discovery order, then the asset table."""
    data = result.data
    _status_line(console, result)
    if "source" in data:
        console.print(Text.assemble(("  source: ", "roam.key"), (data["source"], "roam.note")))
    console.print(
        Text.assemble(
            ("  notes: ", "roam.key"),
            (str(data.get("note_count", 0)), "roam.count"),
            ("  assets: ", "roam.key"),
            (str(data.get("asset_count", 0)), "roam.count"),
        )
    )
    if verbose and data.get("excluded"):
        console.print(Text.assemble(("  excluded: ", "roam.key"), ", ".join(data["excluded"])))

    if data.get("notes"):
        console.print()
        console.print(_path_table("Notes", data["notes"], "roam.note"))
    if data.get("assets"):
        console.print()
        console.print(_path_table("Assets", data["assets"], "roam.asset"))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "closure": _render_closure,
    "references": _render_closure,
}
