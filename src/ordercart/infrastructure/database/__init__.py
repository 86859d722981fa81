"""SQLite database engine and schema via SQLAlchemy Core."""

from ordercart.infrastructure.database.engine import create_db_engine, init_database
from ordercart.infrastructure.database.schema import (
    catalog_items,
    metadata,
    order_lines,
    orders,
)

__all__ = [
    "catalog_items",
    "create_db_engine",
    "init_database",
    "metadata",
    "order_lines",
    "orders",
]
