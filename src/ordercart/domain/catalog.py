"""Catalog items as published by the catalog collaborator."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, Field


class CatalogItem(BaseModel):
    """One menu entry. Immutable once loaded."""

    model_config = {"frozen": True}

    id: int
    name: str
    price: Decimal = Field(ge=0)
    description: str | None = None
    category: str | None = None


def find_duplicate_ids(items: Iterable[CatalogItem]) -> list[int]:
    """Return ids that appear more than once, in first-repeat order."""
    seen: set[int] = set()
    dupes: list[int] = []
    for item in items:
        if item.id in seen and item.id not in dupes:
            dupes.append(item.id)
        seen.add(item.id)
    return dupes
