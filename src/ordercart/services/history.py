"""OrderHistoryService — read back orders kept in the local store."""

from __future__ import annotations

from ordercart.domain.ids import parse_order_id
from ordercart.services.base import BaseService
from ordercart.services.contracts import OrderData, OrderListResultData, dump_validated
from ordercart.services.result import ServiceResult
from ordercart.services.telemetry import traced


class OrderHistoryService(BaseService):
    """Lists and shows stored orders."""

    @traced
    def list_orders(self, *, limit: int = 20, user_id: str | None = None) -> ServiceResult:
        """Most recent orders first, optionally for one user."""
        found = self._backend.order_store.list_orders(limit=limit, user_id=user_id)
        return ServiceResult(
            ok=True,
            op="order_list",
            data=dump_validated(
                OrderListResultData,
                {"count": len(found), "items": [order.to_payload() for order in found]},
            ),
        )

    @traced
    def show_order(self, raw_id: str) -> ServiceResult:
        """One order with its lines."""
        op = "order_show"
        order_id = parse_order_id(raw_id)
        if order_id is None:
            return ServiceResult.failure(op, "NOT_FOUND", f"Not a valid order id: {raw_id}")
        order = self._backend.order_store.get_order(order_id)
        if order is None:
            return ServiceResult.failure(op, "NOT_FOUND", f"No order with id {raw_id}")
        return ServiceResult(ok=True, op=op, data=dump_validated(OrderData, order.to_payload()))
