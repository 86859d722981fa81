"""Tests for database engine setup."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect, text

from ordercart.infrastructure.database.engine import init_database


class TestInitDatabase:
    def test_creates_parent_and_tables(self, tmp_path: Path) -> None:
        db_path = tmp_path / ".ordercart" / "ordercart.db"
        engine = init_database(db_path)
        try:
            assert db_path.is_file()
            tables = set(inspect(engine).get_table_names())
            assert {"catalog_items", "orders", "order_lines"} <= tables
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "store.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        engine.dispose()

    def test_pragmas(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "store.db")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            engine.dispose()
