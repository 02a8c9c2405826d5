"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from doomsday.domain.durations import format_duration
from doomsday.output.console import create_console, get_output, style_for_bucket

if TYPE_CHECKING:
    from rich.console import Console

    from doomsday.services.result import ServiceResult


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

    if result.op == "targets":
        return "\n".join(t["name"] for t in result.data.get("targets", []))
    if result.op == "list":
        return "\n".join(i["common_name"] for i in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="dd.ok")
    op = Text(f"  {result.op}", style="dd.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dd.key")
    if key in ("name", "target"):
        v = Text(str(value), style="dd.name")
    elif key == "address":
        v = Text(str(value), style="dd.address")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _expiry_text(item: dict[str, Any]) -> Text:
    if item.get("expired"):
        return Text("EXPIRED", style="dd.expired")
    return Text(format_duration(timedelta(seconds=item.get("remaining_seconds", 0))))


def _paths_text(item: dict[str, Any]) -> str:
    paths = item.get("paths", [])
    return "\n".join(f"{p.get('backend', '')}:{p.get('location', '')}" for p in paths)


def _cert_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of certificate rows."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Common Name", style="bold", no_wrap=True)
    table.add_column("Expires In", justify="right")
    if verbose:
        table.add_column("Not After", style="dim")
    table.add_column("Found At")

    for item in items:
        row: list[Any] = [str(item.get("common_name", "")), _expiry_text(item)]
        if verbose:
            row.append(str(item.get("expires_at", "")))
        row.append(_paths_text(item))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dd.error")
    op = Text(f"  {result.op}: ", style="dd.op")
    console.print(label, op, Text(msg), sep="", soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Target renderers ──────────────────────────────────────────────────


def _render_targets(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    targets = result.data.get("targets", [])
    if not targets:
        console.print("No targets configured. Add one with `doomsday target <name> <address>`.")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", style="dd.current", no_wrap=True)
    table.add_column("Name", style="dd.name", no_wrap=True)
    table.add_column("Address", style="dd.address")
    table.add_column("Insecure", style="dd.insecure")
    table.add_column("Logged In")
    for t in targets:
        table.add_row(
            "*" if t.get("current") else "",
            str(t.get("name", "")),
            str(t.get("address", "")),
            "yes" if t.get("skip_verify") else "no",
            "yes" if t.get("authenticated") else "no",
        )
    console.print(table)


def _render_target(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    action = result.data.get("action")
    if action in ("deleted", "absent"):
        _status_line(console, result)
        _field(console, "deleted", result.data.get("name"))
        return

    target = result.data.get("target")
    if target is None:
        console.print("No doomsday server is currently targeted")
        return

    if action == "show":
        console.print(Text("Current target", style="dd.op"))
    else:
        _status_line(console, result)
        _field(console, "action", action)
    _field(console, "name", target["name"])
    _field(console, "address", target["address"])
    if target.get("skip_verify"):
        _field(console, "insecure", "yes")
    if verbose:
        _field(console, "logged in", "yes" if target.get("authenticated") else "no")


# ── Remote renderers ──────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No certificates matched")
        return
    console.print(_cert_table(items, verbose=verbose))
    if verbose:
        console.print(Text(f"  {result.data.get('count')} of {result.data.get('total')}", "dim"))


def _render_dashboard(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    shown = False
    for bucket in result.data.get("buckets", []):
        items = bucket.get("items", [])
        if not items:
            continue
        shown = True
        style = style_for_bucket(bucket.get("key", ""))
        console.print(Text(f"{bucket.get('label')} ({len(items)})", style=style))
        console.print(_cert_table(items, verbose=verbose))
        console.print()

    healthy = result.data.get("healthy", 0)
    if not shown:
        console.print(Text("Nothing expires within 28 days", "dd.healthy"))
    console.print(Text(f"{healthy} certificate(s) further out", style="dd.healthy"))


def _render_scheduler(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _field(console, "workers", result.data.get("workers", "unknown"))
    for section in ("running", "pending"):
        tasks = result.data.get(section, [])
        console.print(Text(f"{section.title()} ({len(tasks)})", style="dd.op"))
        if not tasks:
            continue
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        for col in ("ID", "Backend", "Kind", "Reason", "At", "State"):
            table.add_column(col)
        for t in tasks:
            cells = [t.get(key) for key in ("id", "backend", "kind", "reason", "at", "state")]
            table.add_row(*("" if c is None else str(c) for c in cells))
        console.print(table)


def _render_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for key in ("target", "address", "version", "auth_type"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_login(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.data.get("authenticated"):
        console.print(
            f"Logged in to {result.data.get('target')} as {result.data.get('username')}"
        )
    else:
        console.print(f"No login needed for {result.data.get('target')}")


def _render_refresh(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print("Refresh successful")
    if verbose:
        for k, v in result.data.items():
            if k != "refreshed":
                _field(console, k, v)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS = {
    "target": _render_target,
    "targets": _render_targets,
    "list": _render_list,
    "dashboard": _render_dashboard,
    "scheduler": _render_scheduler,
    "info": _render_info,
    "login": _render_login,
    "refresh": _render_refresh,
}
