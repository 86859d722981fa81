"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ordercart.output.console import create_console, get_output
from ordercart.services._helpers import format_money

if TYPE_CHECKING:
    from rich.console import Console

    from ordercart.services.result import ServiceResult
    from ordercart.services.state import SessionSnapshot

_SKIP_REASONS = {
    "no_user": "no signed-in user",
    "empty_cart": "the cart is empty",
    "in_flight": "another submission is in progress",
}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, currency: str = "$") -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, currency=currency)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    order = result.data.get("order")
    if isinstance(order, dict) and order.get("id"):
        return str(order["id"])

    items = result.data.get("items") or result.data.get("lines")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)

    return f"OK: {result.op}"


def render_notices(snapshot: SessionSnapshot) -> str:
    """Render the load banner, submission error, and notification slots."""
    console = create_console()
    if snapshot.load_error is not None:
        console.print(Text(f"! {snapshot.load_error.message}", style="oc.error"))
    if snapshot.submission_error is not None:
        console.print(Text(f"! {snapshot.submission_error.message}", style="oc.error"))
    if snapshot.notification is not None:
        console.print(Text(f"✓ {snapshot.notification.message}", style="oc.notice"))
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _money(value: Any, currency: str) -> str:
    try:
        return format_money(Decimal(str(value)), currency)
    except InvalidOperation:
        return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="oc.ok")
    op = Text(f"  {result.op}", style="oc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="oc.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="oc.id")
    elif key == "total":
        v = Text(str(value), style="oc.money")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


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


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
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
    if span_data.get("annotations"):
        extras = [f"{ak}={av}" for ak, av in span_data["annotations"].items()]
        line += f"  ({', '.join(extras)})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _lines_table(lines: list[dict[str, Any]], currency: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="oc.id", no_wrap=True, justify="right")
    table.add_column("Item", style="oc.name")
    table.add_column("Price", style="oc.money", justify="right")
    table.add_column("Qty", style="oc.qty", justify="right")
    table.add_column("Subtotal", style="oc.money", justify="right")
    for line in lines:
        subtotal = line.get("subtotal")
        if subtotal is None:
            subtotal = Decimal(str(line["price"])) * int(line["quantity"])
        table.add_row(
            str(line["id"]),
            str(line["name"]),
            _money(line["price"], currency),
            str(line["quantity"]),
            _money(subtotal, currency),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="oc.error")
    op = Text(f"  {result.op}", style="oc.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Catalog ───────────────────────────────────────────────────────────


def _render_catalog(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="oc.id", no_wrap=True, justify="right")
    table.add_column("Item", style="oc.name")
    table.add_column("Price", style="oc.money", justify="right")
    table.add_column("Category", style="oc.category")
    if verbose:
        table.add_column("Description", style="dim")
    for item in items:
        row = [
            str(item["id"]),
            str(item["name"]),
            _money(item["price"], currency),
            str(item.get("category") or ""),
        ]
        if verbose:
            row.append(str(item.get("description") or ""))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} items")
    if verbose:
        _render_meta(console, result)


def _render_import(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    _status_line(console, result)
    for key in ("path", "count", "replaced"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Cart ──────────────────────────────────────────────────────────────


def _render_cart(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    lines = result.data.get("lines", [])
    if result.op != "cart_show":
        _status_line(console, result)
        if not result.data.get("changed", False):
            console.print(Text("  (no change)", style="dim"))
    if not lines:
        console.print(Text("Cart is empty", style="dim"))
    else:
        console.print(_lines_table(lines, currency))
        total = _money(result.data.get("total", "0"), currency)
        console.print(Text.assemble(("Total: ", "oc.key"), (total, "oc.money")))
    if verbose:
        _render_meta(console, result)


# ── Orders ────────────────────────────────────────────────────────────


def _order_panel(console: Console, order: dict[str, Any], currency: str) -> None:
    header = [
        f"user: {order['user_id']}",
        f"status: {order['status']}",
        f"submitted: {order['submitted_at']}",
        f"total: {_money(order['total'], currency)}",
    ]
    console.print(Panel("\n".join(header), title=str(order["id"]), border_style="dim", expand=False))
    console.print(_lines_table(order.get("items", []), currency))


def _render_submit(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    if not result.data.get("submitted"):
        reason = str(result.data.get("reason", ""))
        _status_line(console, result)
        console.print(Text(f"  nothing submitted: {_SKIP_REASONS.get(reason, reason)}", style="dim"))
        return

    notice = result.data.get("notification")
    if notice:
        console.print(Text(f"✓ {notice}", style="oc.notice"))
    _order_panel(console, result.data["order"], currency)
    if verbose:
        _render_meta(console, result)


def _render_order_show(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    _order_panel(console, result.data, currency)
    if verbose:
        _render_meta(console, result)


def _render_order_list(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Order", style="oc.id", no_wrap=True)
    table.add_column("User")
    table.add_column("Lines", justify="right")
    table.add_column("Total", style="oc.money", justify="right")
    table.add_column("Submitted", style="dim")
    for order in items:
        table.add_row(
            str(order["id"]),
            str(order["user_id"]),
            str(len(order.get("items", []))),
            _money(order["total"], currency),
            str(order["submitted_at"]),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} orders")
    if verbose:
        _render_meta(console, result)


# ── Fallback ──────────────────────────────────────────────────────────


def _render_generic(
    result: ServiceResult, console: Console, *, verbose: bool = False, currency: str = "$"
) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Catalog
    "catalog_load": _render_catalog,
    "menu_import": _render_import,
    # Cart
    "cart_add": _render_cart,
    "cart_update": _render_cart,
    "cart_remove": _render_cart,
    "cart_show": _render_cart,
    # Orders
    "submit_order": _render_submit,
    "order_list": _render_order_list,
    "order_show": _render_order_show,
}
