"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


def format_money(amount: Decimal, currency: str = "$") -> str:
    """Render *amount* rounded to cents with a currency prefix.

    Examples:
        >>> format_money(Decimal("10"))
        '$10.00'
        >>> format_money(Decimal("2.345"), "€")
        '€2.35'
    """
    return f"{currency}{amount.quantize(CENT, rounding=ROUND_HALF_UP)}"


def parse_item_spec(spec: str) -> tuple[int, int]:
    """Split an ``ID`` or ``ID:QTY`` token into (item_id, quantity).

    Raises ValueError on non-integer parts or a quantity below 1.

    Examples:
        >>> parse_item_spec("3")
        (3, 1)
        >>> parse_item_spec("3:2")
        (3, 2)
    """
    raw_id, sep, raw_qty = spec.strip().partition(":")
    item_id = int(raw_id)
    quantity = int(raw_qty) if sep else 1
    if quantity < 1:
        msg = f"Quantity must be at least 1 in {spec!r}"
        raise ValueError(msg)
    return item_id, quantity
