"""Cart lines and the in-memory cart store.

Rules:
- At most one line per catalog id; repeated adds merge into quantity.
- Price and name are snapshotted on the first add and never refreshed
  from the catalog while the line exists.
- Quantities are always >= 1. ``update_quantity`` below 1 is a no-op;
  ``remove`` is the only way to drop a line.

Mutators return ``True`` when the cart changed and ``False`` on a
guarded no-op. A quantity that is not a whole number fails line
validation with pydantic's ``ValidationError`` and leaves the cart as it was.
"""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

from pydantic import BaseModel, Field

from ordercart.domain.catalog import CatalogItem

ZERO = Decimal("0")


class CartLine(BaseModel):
    """One selected catalog item with its quantity."""

    model_config = {"frozen": True}

    id: int
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_item(cls, item: CatalogItem) -> CartLine:
        return cls(id=item.id, name=item.name, price=item.price, quantity=1)

    def with_quantity(self, quantity: int) -> CartLine:
        """A validated copy of this line holding *quantity*."""
        return CartLine.model_validate({**self.model_dump(), "quantity": quantity})


class CartStore:
    """Ordered-but-unsubmitted selections, keyed by catalog id.

    Lines are frozen; a quantity change swaps in a new line object so
    snapshots returned by :meth:`lines` never change underneath a caller.
    """

    def __init__(self) -> None:
        self._lines: dict[int, CartLine] = {}

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add(self, item: CatalogItem) -> bool:
        """Insert *item* with quantity 1, or bump the existing line by 1."""
        existing = self._lines.get(item.id)
        if existing is None:
            self._lines[item.id] = CartLine.from_item(item)
        else:
            self._lines[item.id] = existing.with_quantity(existing.quantity + 1)
        return True

    def update_quantity(self, item_id: int, quantity: int) -> bool:
        """Set the quantity of an existing line. ``quantity < 1`` is ignored."""
        if quantity < 1:
            return False
        existing = self._lines.get(item_id)
        if existing is None or existing.quantity == quantity:
            return False
        self._lines[item_id] = existing.with_quantity(quantity)
        return True

    def remove(self, item_id: int) -> bool:
        """Drop the line for *item_id* if present."""
        return self._lines.pop(item_id, None) is not None

    def clear(self) -> bool:
        """Empty the cart. Only a successful submission calls this."""
        if not self._lines:
            return False
        self._lines.clear()
        return True

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def total(self) -> Decimal:
        """Sum of price x quantity over all lines."""
        return sum((line.subtotal for line in self._lines.values()), ZERO)

    def lines(self) -> tuple[CartLine, ...]:
        """Snapshot of the current lines in insertion order."""
        return tuple(self._lines.values())

    def get(self, item_id: int) -> CartLine | None:
        return self._lines.get(item_id)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._lines

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines())
