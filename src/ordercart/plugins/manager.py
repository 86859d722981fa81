"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``ordercart.plugins``
group via pluggy, plus direct registration for in-process plugins.
"""

from __future__ import annotations

import logging

import pluggy

from ordercart.plugins.hookspecs import OrderCartHookSpec

PROJECT_NAME = "ordercart"
ENTRYPOINT_GROUP = "ordercart.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Owns the pluggy manager the event bus dispatches through."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(OrderCartHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self) -> list[str]:
        """Load plugins registered under the ``ordercart.plugins`` entry point group.

        A plugin that fails to import is logged and skipped; it never
        prevents the rest of the system from starting.

        Returns the names of all registered plugins.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRYPOINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry point plugins", exc_info=True)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register an in-process plugin instance."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]
