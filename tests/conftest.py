"""Shared pytest fixtures and test helpers for ordercart tests."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Generator
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from ordercart.config.settings import OrderCartSettings
from ordercart.domain.catalog import CatalogItem
from ordercart.domain.identity import Identity
from ordercart.domain.order import Order
from ordercart.infrastructure.backend import Backend
from ordercart.infrastructure.identity import StaticSessionProvider
from ordercart.services.session import OrderSession
from ordercart.services.telemetry import disable_telemetry

MENU: list[dict[str, Any]] = [
    {"id": 1, "name": "Margherita", "price": "9.50", "category": "pizza"},
    {"id": 2, "name": "Caesar Salad", "price": "7.25", "category": "salad"},
    {"id": 3, "name": "Lemonade", "price": "3.00", "category": "drinks"},
]


def menu_items() -> list[CatalogItem]:
    return [CatalogItem.model_validate(entry) for entry in MENU]


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class FakeCatalogSource:
    """Catalog source returning a fixed list, or raising *error*.

    Set ``gate`` to an ``asyncio.Event`` to hold the fetch open.
    """

    def __init__(self, items: list[Any] | None = None, *, error: Exception | None = None) -> None:
        self.items: list[Any] = menu_items() if items is None else items
        self.error = error
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def fetch_catalog(self) -> list[Any]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.items)


class FakeOrderSink:
    """Order sink recording accepted orders, or raising *error*.

    Set ``gate`` to an ``asyncio.Event`` to hold the submission open.
    """

    def __init__(self, *, error: Exception | None = None) -> None:
        self.orders: list[Order] = []
        self.error = error
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def submit_order(self, order: Order) -> None:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        self.orders.append(order)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Commands run with -v turn telemetry on for the whole context."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure logging; put the root logger back."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("ordercart")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ORDERCART_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> OrderCartSettings:
    return OrderCartSettings.from_cli(root=tmp_path)


@pytest.fixture
def catalog_source() -> FakeCatalogSource:
    return FakeCatalogSource()


@pytest.fixture
def order_sink() -> FakeOrderSink:
    return FakeOrderSink()


@pytest.fixture
def identity() -> StaticSessionProvider:
    return StaticSessionProvider(Identity(id="alice", name="Alice"))


@pytest.fixture
def backend(
    settings: OrderCartSettings,
    catalog_source: FakeCatalogSource,
    order_sink: FakeOrderSink,
    identity: StaticSessionProvider,
) -> Generator[Backend]:
    """Backend wired entirely to in-memory fakes (no database)."""
    b = Backend(settings, catalog=catalog_source, orders=order_sink, identity=identity)
    try:
        yield b
    finally:
        b.close()


@pytest.fixture
def sql_backend(settings: OrderCartSettings) -> Generator[Backend]:
    """Backend using the real SQLite collaborators under tmp_path."""
    b = Backend(settings, identity=StaticSessionProvider(Identity(id="alice")))
    try:
        yield b
    finally:
        b.close()


@pytest.fixture
def session(backend: Backend) -> OrderSession:
    return OrderSession(backend)


@pytest.fixture
def menu_file(tmp_path: Path) -> Path:
    """A JSON menu file holding the standard test menu."""
    path = tmp_path / "menu.json"
    path.write_text(json.dumps({"items": MENU}), encoding="utf-8")
    return path


@pytest.fixture
def _isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def seed_menu(backend: Backend, entries: list[dict[str, Any]] | None = None) -> int:
    """Write menu entries straight into the catalog store."""
    items = [CatalogItem.model_validate(e) for e in (entries or MENU)]
    return backend.catalog_store.import_items(items)


def money(value: str) -> Decimal:
    return Decimal(value)
