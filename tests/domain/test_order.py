"""Tests for Order records."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from ordercart.domain.cart import CartLine
from ordercart.domain.order import Order, build_order
from ordercart.domain.types import OrderStatus

LINES = (
    CartLine(id=1, name="Margherita", price=Decimal("9.50"), quantity=2),
    CartLine(id=3, name="Lemonade", price=Decimal("3.00"), quantity=1),
)


class TestBuildOrder:
    def test_defaults(self) -> None:
        order = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        assert isinstance(order.id, uuid.UUID)
        assert order.status is OrderStatus.PENDING
        assert order.user_id == "alice"
        assert order.items == LINES
        assert order.submitted_at.tzinfo is not None

    def test_total_is_taken_as_given(self) -> None:
        order = build_order(LINES, total=Decimal("21.99"), user_id="alice")
        assert order.total == Decimal("21.99")

    def test_each_build_gets_a_fresh_id(self) -> None:
        a = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        b = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        assert a.id != b.id

    def test_explicit_id_and_time(self) -> None:
        oid = uuid.UUID("0b0e5f0c-9c43-4a58-9a37-6f6d8f4b1f0e")
        at = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        order = build_order(LINES, total=Decimal("22.00"), user_id="u", order_id=oid, submitted_at=at)
        assert order.id == oid
        assert order.submitted_at == at

    def test_empty_items_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_order((), total=Decimal("0"), user_id="alice")


class TestOrderPayload:
    def test_payload_is_json_safe(self) -> None:
        at = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        order = build_order(LINES, total=Decimal("22.00"), user_id="alice", submitted_at=at)
        payload = order.to_payload()
        assert payload["id"] == str(order.id)
        assert payload["status"] == "pending"
        assert payload["total"] == "22.00"
        assert payload["submitted_at"] == "2025-01-02T03:04:05+00:00"
        assert payload["items"][0] == {
            "id": 1,
            "name": "Margherita",
            "price": "9.50",
            "quantity": 2,
        }

    def test_line_count(self) -> None:
        order = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        assert order.line_count == 2

    def test_frozen(self) -> None:
        order = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        with pytest.raises(ValidationError):
            order.user_id = "mallory"  # type: ignore[misc]

    def test_round_trip_through_model_validate(self) -> None:
        order = build_order(LINES, total=Decimal("22.00"), user_id="alice")
        assert Order.model_validate(order.model_dump()) == order
