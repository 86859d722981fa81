"""Command group: orders (place, list, show)."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from ordercart.commands._base import OrderGroup
from ordercart.services.result import ServiceResult

if TYPE_CHECKING:
    from ordercart.commands._context import AppContext
    from ordercart.services.session import OrderSession

_ORDER_EXAMPLES = """\
  ordercart --user alice order place 1 2:3
  ordercart order place 4 --dry-run
  ordercart order list --limit 5
  ordercart order show 0b0e5f0c-9c43-4a58-9a37-6f6d8f4b1f0e"""


@click.group(cls=OrderGroup, examples=_ORDER_EXAMPLES)
@click.pass_obj
def order(app: AppContext) -> None:
    """Place orders and browse order history."""


async def _build_and_submit(
    session: OrderSession,
    specs: list[tuple[int, int]],
    *,
    dry_run: bool,
) -> ServiceResult:
    loaded = await session.load_catalog()
    if not loaded.ok:
        return loaded

    for item_id, quantity in specs:
        added = session.add_item_by_id(item_id)
        if not added.ok:
            return added
        if quantity > 1:
            line = session.state.cart.get(item_id)
            assert line is not None
            session.update_quantity(item_id, line.quantity + quantity - 1)

    if dry_run:
        return session.cart()

    result = await session.submit()
    if result.ok and result.data.get("reason") == "no_user":
        return ServiceResult.failure(
            "submit_order",
            "NO_USER",
            "No signed-in user; pass --user or set [session] user_id",
        )
    return result


@order.command(
    examples="""\
  ordercart --user alice order place 1
  ordercart --user alice order place 1:2 3
  ordercart order place 2:4 --dry-run""",
)
@click.argument("items", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Build and show the cart without submitting.")
@click.pass_obj
def place(app: AppContext, items: tuple[str, ...], dry_run: bool) -> None:
    """Build a cart from ITEMS (ID or ID:QTY) and submit it."""
    from ordercart.services._helpers import parse_item_spec
    from ordercart.services.session import OrderSession

    specs: list[tuple[int, int]] = []
    for raw in items:
        try:
            specs.append(parse_item_spec(raw))
        except ValueError as exc:
            app.emit(
                ServiceResult.failure(
                    "submit_order",
                    "INVALID_ITEM_SPEC",
                    str(exc),
                    detail={"item": raw},
                )
            )
            return

    session = OrderSession(app.backend)
    app.emit(asyncio.run(_build_and_submit(session, specs, dry_run=dry_run)))


@order.command(
    "list",
    examples="""\
  ordercart order list
  ordercart order list --limit 5
  ordercart --user alice order list --mine""",
)
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.option("--mine", is_flag=True, help="Only orders placed by the current user.")
@click.pass_obj
def list_cmd(app: AppContext, limit: int, mine: bool) -> None:
    """List recent orders, newest first."""
    from ordercart.services.history import OrderHistoryService

    user_id: str | None = None
    if mine:
        user = app.backend.identity.current_user
        if user is None:
            app.emit(
                ServiceResult.failure(
                    "order_list",
                    "NO_USER",
                    "No signed-in user; pass --user or set [session] user_id",
                )
            )
            return
        user_id = user.id
    app.emit(OrderHistoryService(app.backend).list_orders(limit=limit, user_id=user_id))


@order.command(
    examples="""\
  ordercart order show 0b0e5f0c-9c43-4a58-9a37-6f6d8f4b1f0e
  ordercart --json order show 0b0e5f0c-9c43-4a58-9a37-6f6d8f4b1f0e""",
)
@click.argument("order_id")
@click.pass_obj
def show(app: AppContext, order_id: str) -> None:
    """Show one stored order with its lines."""
    from ordercart.services.history import OrderHistoryService

    app.emit(OrderHistoryService(app.backend).show_order(order_id))
