"""OrderSession — one cart session wired around a single SessionState.

The session is the surface a presentation layer talks to. Cart
operations are synchronous state transitions; catalog loading and order
submission are coroutines that suspend only on their collaborator call.
Every operation returns a :class:`ServiceResult`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ordercart.domain.cart import CartStore
from ordercart.domain.catalog import CatalogItem
from ordercart.services.base import BaseService
from ordercart.services.catalog import CatalogLoader
from ordercart.services.contracts import CartResultData, dump_validated
from ordercart.services.result import ServiceResult
from ordercart.services.state import Listener, SessionState
from ordercart.services.submit import OrderSubmitter
from ordercart.services.telemetry import traced

if TYPE_CHECKING:
    from collections.abc import Callable

    from ordercart.infrastructure.backend import Backend


def cart_payload(cart: CartStore, *, changed: bool) -> dict[str, Any]:
    return dump_validated(
        CartResultData,
        {
            "changed": changed,
            "count": len(cart),
            "item_count": cart.item_count,
            "total": str(cart.total()),
            "lines": [
                {
                    "id": line.id,
                    "name": line.name,
                    "price": str(line.price),
                    "quantity": line.quantity,
                    "subtotal": str(line.subtotal),
                }
                for line in cart.lines()
            ],
        },
    )


class OrderSession(BaseService):
    """Façade over catalog loading, cart mutation, and submission."""

    def __init__(self, backend: Backend, state: SessionState | None = None) -> None:
        super().__init__(backend)
        self.state = state or SessionState()
        self.catalog = CatalogLoader(backend, self.state)
        self.submitter = OrderSubmitter(backend, self.state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _cart_result(
        self,
        op: str,
        *,
        changed: bool,
        action: str,
        item_id: int,
    ) -> ServiceResult:
        warnings: list[str] = []
        if changed:
            self.state.notify()
            line = self.state.cart.get(item_id)
            self._dispatch_event(
                "post_cart_change",
                {
                    "action": action,
                    "item_id": item_id,
                    "quantity": line.quantity if line is not None else 0,
                },
                warnings,
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=cart_payload(self.state.cart, changed=changed),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Attach a presentation-layer listener to state snapshots."""
        return self.state.subscribe(listener)

    async def load_catalog(self) -> ServiceResult:
        return await self.catalog.load()

    @traced
    def add_item(self, item: CatalogItem) -> ServiceResult:
        """Add one unit of *item* to the cart."""
        changed = self.state.cart.add(item)
        return self._cart_result("cart_add", changed=changed, action="add", item_id=item.id)

    def add_item_by_id(self, item_id: int) -> ServiceResult:
        """Add one unit of the loaded catalog item with *item_id*."""
        item = self.state.find_item(item_id)
        if item is None:
            return ServiceResult.failure(
                "cart_add",
                "UNKNOWN_ITEM",
                f"No menu item with id {item_id}",
                detail={"item_id": item_id},
            )
        return self.add_item(item)

    @traced
    def update_quantity(self, item_id: int, quantity: int) -> ServiceResult:
        """Set a line's quantity; values below 1 and unknown ids are no-ops."""
        changed = self.state.cart.update_quantity(item_id, quantity)
        return self._cart_result("cart_update", changed=changed, action="update", item_id=item_id)

    @traced
    def remove_item(self, item_id: int) -> ServiceResult:
        """Drop a line from the cart; unknown ids are no-ops."""
        changed = self.state.cart.remove(item_id)
        return self._cart_result("cart_remove", changed=changed, action="remove", item_id=item_id)

    def cart(self) -> ServiceResult:
        """Current lines and total."""
        return ServiceResult(
            ok=True,
            op="cart_show",
            data=cart_payload(self.state.cart, changed=False),
        )

    async def submit(self) -> ServiceResult:
        return await self.submitter.submit()

    def dismiss_notification(self) -> ServiceResult:
        dismissed = self.state.notification.dismiss()
        return ServiceResult(ok=True, op="dismiss_notification", data={"dismissed": dismissed})

    def clear_errors(self) -> ServiceResult:
        """Clear the submission-error slot. The load banner stays until reload."""
        had_error = self.state.submission_error is not None
        if had_error:
            self.state.set_submission_error(None)
            self.state.notify()
        return ServiceResult(ok=True, op="clear_errors", data={"cleared": had_error})
