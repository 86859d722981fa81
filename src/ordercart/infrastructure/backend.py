"""Backend — the single dependency injected into every service.

The Backend owns the settings, the collaborators the core talks to
(catalog source, order sink, session provider), and the lifecycle event
bus. Collaborators default to the SQLite-backed implementations; any of
them can be replaced at construction time, which is how tests and
embedding applications plug in their own services.

The database is opened lazily, so a Backend built entirely from
injected collaborators never touches the filesystem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ordercart.infrastructure.database.engine import init_database
from ordercart.infrastructure.identity import StaticSessionProvider
from ordercart.infrastructure.repositories.catalog import SqlCatalogSource
from ordercart.infrastructure.repositories.orders import SqlOrderSink

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from ordercart.config.settings import OrderCartSettings
    from ordercart.plugins.event_bus import EventBus
    from ordercart.services.collaborators import CatalogSource, OrderSink, SessionProvider

logger = logging.getLogger(__name__)


class Backend:
    """Collaborator registry for one process.

    Constructed once at CLI startup from :class:`OrderCartSettings` and
    stored on the click context. Services receive the Backend via their
    :class:`BaseService` constructor.
    """

    def __init__(
        self,
        settings: OrderCartSettings,
        *,
        catalog: CatalogSource | None = None,
        orders: OrderSink | None = None,
        identity: SessionProvider | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._catalog_store: SqlCatalogSource | None = None
        self._order_store: SqlOrderSink | None = None
        self._catalog = catalog
        self._orders = orders
        self._identity = identity
        self._event_bus = event_bus

    @property
    def settings(self) -> OrderCartSettings:
        """The resolved settings for this process."""
        return self._settings

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine (database created on first access)."""
        if self._engine is None:
            self._engine = init_database(self._settings.db_path)
            logger.debug("Opened database at %s", self._settings.db_path)
        return self._engine

    @property
    def catalog_store(self) -> SqlCatalogSource:
        """The local catalog table (menu imports always land here)."""
        if self._catalog_store is None:
            self._catalog_store = SqlCatalogSource(self.engine)
        return self._catalog_store

    @property
    def order_store(self) -> SqlOrderSink:
        """The local order tables (history is always read from here)."""
        if self._order_store is None:
            self._order_store = SqlOrderSink(self.engine)
        return self._order_store

    @property
    def catalog(self) -> CatalogSource:
        """Catalog collaborator; defaults to :attr:`catalog_store`."""
        if self._catalog is None:
            self._catalog = self.catalog_store
        return self._catalog

    @property
    def orders(self) -> OrderSink:
        """Order-persistence collaborator; defaults to :attr:`order_store`."""
        if self._orders is None:
            self._orders = self.order_store
        return self._orders

    @property
    def identity(self) -> SessionProvider:
        if self._identity is None:
            self._identity = StaticSessionProvider.from_settings(self._settings)
        return self._identity

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None if not initialized)."""
        return self._event_bus

    def init_event_bus(self, *plugins: object) -> EventBus | None:
        """Create a PluginManager, discover entry-point plugins, wire the bus.

        *plugins* are registered alongside the discovered ones; embedding
        applications use this for in-process hooks. Skipped when
        ``[plugins] enabled = false``.
        """
        if not self._settings.plugins.enabled:
            return None

        from ordercart.plugins.event_bus import EventBus
        from ordercart.plugins.manager import PluginManager

        pm = PluginManager()
        for plugin in plugins:
            pm.register_plugin(plugin)
        names = pm.discover_and_load()
        if names:
            logger.debug("Loaded plugins: %s", ", ".join(names))
        self._event_bus = EventBus(pm)
        return self._event_bus

    def close(self) -> None:
        """Dispose of the database engine, if one was opened."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
