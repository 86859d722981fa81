"""SqlOrderSink — order persistence in the local database.

``submit_order`` writes the order row and its lines in one transaction.
Any database failure surfaces as :class:`PersistenceError` whose message
is suitable for showing to the user. Duplicate ids are rejected, so a
resubmitted order record is never stored twice.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ordercart.domain.cart import CartLine
from ordercart.domain.order import Order
from ordercart.domain.types import OrderStatus
from ordercart.infrastructure.database.schema import order_lines, orders
from ordercart.services._helpers import now_iso

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """The order sink could not store an order."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SqlOrderSink:
    """Order-persistence collaborator backed by SQLite."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def submit_order(self, order: Order) -> None:
        await asyncio.to_thread(self.save, order)

    def save(self, order: Order) -> None:
        """Insert *order* and its lines atomically."""
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(orders).values(
                        id=str(order.id),
                        user_id=order.user_id,
                        status=str(order.status),
                        total=str(order.total),
                        submitted_at=order.submitted_at.isoformat(),
                        created=now_iso(),
                    )
                )
                conn.execute(
                    insert(order_lines),
                    [
                        {
                            "order_id": str(order.id),
                            "line_index": idx,
                            "item_id": line.id,
                            "name": line.name,
                            "price": str(line.price),
                            "quantity": line.quantity,
                        }
                        for idx, line in enumerate(order.items)
                    ],
                )
        except IntegrityError as exc:
            raise PersistenceError(f"Order {order.id} already exists") from exc
        except SQLAlchemyError as exc:
            logger.debug("Order insert failed", exc_info=True)
            raise PersistenceError("Order store unavailable") from exc

    def list_orders(self, *, limit: int = 20, user_id: str | None = None) -> list[Order]:
        """Most recent orders first."""
        query = select(orders).order_by(orders.c.submitted_at.desc()).limit(limit)
        if user_id is not None:
            query = query.where(orders.c.user_id == user_id)
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
            return [self._load(conn, row) for row in rows]

    def get_order(self, order_id: uuid.UUID) -> Order | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(orders).where(orders.c.id == str(order_id))).first()
            if row is None:
                return None
            return self._load(conn, row)

    @staticmethod
    def _load(conn: Any, row: Any) -> Order:
        line_rows = conn.execute(
            select(order_lines)
            .where(order_lines.c.order_id == row.id)
            .order_by(order_lines.c.line_index)
        ).fetchall()
        return Order(
            id=uuid.UUID(row.id),
            items=tuple(
                CartLine(
                    id=line.item_id,
                    name=line.name,
                    price=Decimal(line.price),
                    quantity=line.quantity,
                )
                for line in line_rows
            ),
            total=Decimal(row.total),
            submitted_at=datetime.fromisoformat(row.submitted_at),
            status=OrderStatus(row.status),
            user_id=row.user_id,
        )
