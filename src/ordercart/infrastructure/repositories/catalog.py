"""SqlCatalogSource — the menu as stored in the local database."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from ordercart.domain.catalog import CatalogItem
from ordercart.infrastructure.database.schema import catalog_items
from ordercart.services._helpers import now_iso

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class SqlCatalogSource:
    """Catalog collaborator reading available items from SQLite."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def fetch_catalog(self) -> list[CatalogItem]:
        """Return available items ordered by id (query runs off the loop)."""
        return await asyncio.to_thread(self.fetch_catalog_sync)

    def fetch_catalog_sync(self) -> list[CatalogItem]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(catalog_items)
                .where(catalog_items.c.available == 1)
                .order_by(catalog_items.c.id)
            ).fetchall()
        return [
            CatalogItem(
                id=row.id,
                name=row.name,
                price=Decimal(row.price),
                description=row.description,
                category=row.category,
            )
            for row in rows
        ]

    def import_items(self, items: Iterable[CatalogItem], *, replace: bool = False) -> int:
        """Upsert *items*; with *replace*, items not in the import are hidden.

        Returns the number of items written.
        """
        created = now_iso()
        count = 0
        with self._engine.begin() as conn:
            if replace:
                conn.execute(update(catalog_items).values(available=0))
            for item in items:
                conn.execute(delete(catalog_items).where(catalog_items.c.id == item.id))
                conn.execute(
                    insert(catalog_items).values(
                        id=item.id,
                        name=item.name,
                        price=str(item.price),
                        description=item.description,
                        category=item.category,
                        available=1,
                        created=created,
                    )
                )
                count += 1
        return count

