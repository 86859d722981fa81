"""Menu files — JSON or TOML item lists for seeding the catalog store.

JSON accepts either a top-level list of items or ``{"items": [...]}``;
floats are parsed straight to Decimal so ``4.10`` stays ``4.10``. TOML
uses an ``[[items]]`` array of tables.
"""

from __future__ import annotations

import json
import tomllib
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ordercart.domain.catalog import CatalogItem, find_duplicate_ids


class MenuFileError(ValueError):
    """The menu file is missing, unreadable, or malformed."""


def _read_raw(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read menu file {path}: {exc.strerror or exc}"
        raise MenuFileError(msg) from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text, parse_float=Decimal)
        if suffix == ".toml":
            return tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Invalid {suffix[1:].upper()} in {path}: {exc}"
        raise MenuFileError(msg) from exc

    msg = f"Unsupported menu file type {suffix or '(none)'!r}; use .json or .toml"
    raise MenuFileError(msg)


def load_menu_file(path: Path) -> list[CatalogItem]:
    """Parse and validate every item in *path*."""
    raw = _read_raw(path)
    entries = raw.get("items") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        msg = f"Menu file {path} must contain a list of items"
        raise MenuFileError(msg)

    items: list[CatalogItem] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, dict) and isinstance(entry.get("price"), float):
            entry = {**entry, "price": Decimal(str(entry["price"]))}
        try:
            items.append(CatalogItem.model_validate(entry))
        except ValidationError as exc:
            first = exc.errors()[0]
            where = ".".join(str(part) for part in first["loc"]) or "item"
            msg = f"Item #{index + 1} in {path}: {where}: {first['msg']}"
            raise MenuFileError(msg) from exc

    dupes = find_duplicate_ids(items)
    if dupes:
        msg = f"Duplicate item ids in {path}: {', '.join(str(d) for d in dupes)}"
        raise MenuFileError(msg)
    return items
