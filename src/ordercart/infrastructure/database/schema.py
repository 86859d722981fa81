"""SQLAlchemy Core table definitions for the ordercart database.

Money columns are TEXT holding a decimal string so values round-trip
exactly; SQLite has no native decimal type.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

metadata = MetaData()

catalog_items = Table(
    "catalog_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
    Column("price", Text, nullable=False),
    Column("description", Text),
    Column("category", Text),
    Column("available", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Text, primary_key=True),  # UUID string, client-generated
    Column("user_id", Text, nullable=False),
    Column("status", Text, nullable=False),
    Column("total", Text, nullable=False),
    Column("submitted_at", Text, nullable=False),
    Column("created", Text, nullable=False),  # when the sink stored it
)

order_lines = Table(
    "order_lines",
    metadata,
    Column("order_id", Text, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    Column("line_index", Integer, nullable=False),
    Column("item_id", Integer, nullable=False),
    Column("name", Text, nullable=False),
    Column("price", Text, nullable=False),
    Column("quantity", Integer, nullable=False),
    PrimaryKeyConstraint("order_id", "line_index"),
)

Index("idx_orders_submitted_at", orders.c.submitted_at)
Index("idx_orders_user_id", orders.c.user_id)
