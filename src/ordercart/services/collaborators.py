"""Protocols for the external collaborators the core consumes.

The core never reaches past these seams: it asks the catalog source for
items, hands a finished order to the order sink, and reads the acting
user from the session provider. Any object with the right shape works,
including the SQLite-backed ones in :mod:`ordercart.infrastructure`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ordercart.domain.catalog import CatalogItem
from ordercart.domain.identity import Identity
from ordercart.domain.order import Order


@runtime_checkable
class CatalogSource(Protocol):
    """Data-fetch service returning the menu."""

    async def fetch_catalog(self) -> Sequence[CatalogItem]:
        """Return all available items, or raise on transport/parse failure."""
        ...


@runtime_checkable
class OrderSink(Protocol):
    """Order-persistence service."""

    async def submit_order(self, order: Order) -> None:
        """Persist *order*. Raise with a human-readable message on failure."""
        ...


@runtime_checkable
class SessionProvider(Protocol):
    """Supplies the authenticated identity, if any."""

    @property
    def current_user(self) -> Identity | None: ...
