"""Synchronous lifecycle event dispatch via pluggy.

The session runs on one cooperative event loop, so hooks are called
inline right after the transition they report.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ordercart.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatches lifecycle hooks to registered plugins."""

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> list[str]:
        """Call *hook_name* with *payload*.

        Returns error messages for failed hooks (empty on success). Never
        raises for plugin errors. Unknown hook names are ignored.
        """
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            logger.debug("No hook named %s", hook_name)
            return []

        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            return [str(exc) or type(exc).__name__]
        return []
