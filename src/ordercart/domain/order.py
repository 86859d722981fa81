"""Immutable order records built from a cart snapshot."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from ordercart.domain.cart import CartLine
from ordercart.domain.ids import generate_order_id
from ordercart.domain.types import OrderStatus


class Order(BaseModel):
    """A submitted cart. Owned by the submission call, never by the cart."""

    model_config = {"frozen": True}

    id: uuid.UUID
    items: tuple[CartLine, ...] = Field(min_length=1)
    total: Decimal
    submitted_at: datetime
    status: OrderStatus = OrderStatus.PENDING
    user_id: str

    @property
    def line_count(self) -> int:
        return len(self.items)

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict used by results, hooks, and renderers."""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "status": str(self.status),
            "submitted_at": self.submitted_at.isoformat(),
            "total": str(self.total),
            "items": [
                {
                    "id": line.id,
                    "name": line.name,
                    "price": str(line.price),
                    "quantity": line.quantity,
                }
                for line in self.items
            ],
        }


def build_order(
    lines: Iterable[CartLine],
    *,
    total: Decimal,
    user_id: str,
    order_id: uuid.UUID | None = None,
    submitted_at: datetime | None = None,
) -> Order:
    """Construct a pending order from a snapshot of cart lines.

    *total* is passed in rather than recomputed so the order carries
    exactly the figure the cart reported at submission time.
    """
    return Order(
        id=order_id or generate_order_id(),
        items=tuple(lines),
        total=total,
        submitted_at=submitted_at or datetime.now(UTC),
        status=OrderStatus.PENDING,
        user_id=user_id,
    )
