"""BaseService — abstract foundation for all ordercart services.

Every service receives a :class:`Backend` at construction time. The
Backend provides the collaborators (catalog source, order sink, session
provider), settings, and the lifecycle event bus.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ordercart.infrastructure.backend import Backend

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class CatalogLoader(BaseService):
            async def load(self) -> ServiceResult:
                items = await self._backend.catalog.fetch_catalog()
                ...
    """

    def __init__(self, backend: Backend) -> None:
        self._backend = backend

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event. No-op if the event bus is disabled.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        bus = self._backend.event_bus
        if bus is None:
            return
        try:
            failures = bus.dispatch(hook_name, payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
            return
        if failures:
            warnings.append(f"Plugin hook {hook_name} failed: {'; '.join(failures)}")
