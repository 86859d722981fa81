"""SQLite-backed catalog and order collaborators."""

from ordercart.infrastructure.repositories.catalog import SqlCatalogSource
from ordercart.infrastructure.repositories.orders import PersistenceError, SqlOrderSink

__all__ = ["PersistenceError", "SqlCatalogSource", "SqlOrderSink"]
