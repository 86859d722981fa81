"""Pluggy hook specifications for ordercart lifecycle events.

Hooks fire after the state transition they describe has completed, so a
plugin always observes the settled session.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("ordercart")
hookimpl = pluggy.HookimplMarker("ordercart")


class OrderCartHookSpec:
    """Hook specifications for the ordercart plugin system."""

    @hookspec
    def post_catalog_load(self, item_count: int, ok: bool) -> None:
        """Called after a catalog load settles (ready or error)."""

    @hookspec
    def post_cart_change(self, action: str, item_id: int, quantity: int) -> None:
        """Called after add/update/remove actually changed the cart.

        *quantity* is the line's new quantity, or 0 after a removal.
        """

    @hookspec
    def post_order_submit(
        self,
        order_id: str,
        user_id: str,
        total: str,
        line_count: int,
    ) -> None:
        """Called after the order sink accepted an order."""

    @hookspec
    def post_order_failed(self, order_id: str, user_id: str, message: str) -> None:
        """Called after the order sink rejected an order."""
