"""CatalogLoader — fetch the menu once and publish it into session state.

Pipeline: LOADING -> FETCH (with optional timeout) -> VALIDATE -> READY | ERROR

A failed fetch leaves a load-error banner in state until the next
``load()`` call. Nothing is retried automatically. The last catalog that
loaded successfully stays in state through a failed reload, so items
already on screen can still be added while the banner is up.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from ordercart.domain.catalog import CatalogItem, find_duplicate_ids
from ordercart.domain.types import CatalogStatus
from ordercart.services.base import BaseService
from ordercart.services.contracts import CatalogResultData, dump_validated
from ordercart.services.result import ServiceResult
from ordercart.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from ordercart.infrastructure.backend import Backend
    from ordercart.services.state import SessionState

log = structlog.get_logger(__name__)


class CatalogParseError(ValueError):
    """The catalog source returned data that cannot be used."""


def catalog_payload(items: tuple[CatalogItem, ...], status: CatalogStatus) -> dict[str, object]:
    return dump_validated(
        CatalogResultData,
        {
            "status": str(status),
            "count": len(items),
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "price": str(item.price),
                    "description": item.description,
                    "category": item.category,
                }
                for item in items
            ],
        },
    )


class CatalogLoader(BaseService):
    """Loads the menu catalog into a :class:`SessionState`."""

    def __init__(self, backend: Backend, state: SessionState) -> None:
        super().__init__(backend)
        self._state = state
        self._in_flight = False

    @traced
    async def load(self) -> ServiceResult:
        """Fetch the catalog and transition loading -> ready | error."""
        op = "catalog_load"
        if self._in_flight:
            log.debug("catalog.load_skipped", reason="in_flight")
            return ServiceResult(
                ok=True,
                op=op,
                data=catalog_payload(self._state.catalog, self._state.catalog_status),
            )

        cfg = self._backend.settings.catalog
        state = self._state
        self._in_flight = True
        state.catalog_lifecycle.transition(CatalogStatus.LOADING)
        state.set_load_error(None)
        state.notify()

        warnings: list[str] = []
        try:
            with trace_span("fetch_catalog"):
                items = await self._fetch(cfg.fetch_timeout_seconds)
        except Exception as exc:
            log.warning("catalog.load_failed", error=str(exc) or type(exc).__name__, exc_info=True)
            state.catalog_lifecycle.transition(CatalogStatus.ERROR)
            state.set_load_error(cfg.error_message)
            state.notify()
            self._dispatch_event("post_catalog_load", {"item_count": 0, "ok": False}, warnings)
            return ServiceResult.failure(
                op,
                "LOAD_FAILED",
                cfg.error_message,
                detail={"cause": str(exc) or type(exc).__name__},
                warnings=warnings,
            )
        finally:
            self._in_flight = False

        state.catalog = items
        state.catalog_lifecycle.transition(CatalogStatus.READY)
        state.notify()
        log.debug("catalog.loaded", count=len(items))
        self._dispatch_event("post_catalog_load", {"item_count": len(items), "ok": True}, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data=catalog_payload(items, CatalogStatus.READY),
            warnings=warnings,
        )

    async def _fetch(self, timeout: float | None) -> tuple[CatalogItem, ...]:
        fetch = self._backend.catalog.fetch_catalog()
        raw = await asyncio.wait_for(fetch, timeout) if timeout else await fetch

        items = tuple(
            item if isinstance(item, CatalogItem) else CatalogItem.model_validate(item)
            for item in raw
        )
        dupes = find_duplicate_ids(items)
        if dupes:
            msg = f"Duplicate catalog ids: {', '.join(str(d) for d in dupes)}"
            raise CatalogParseError(msg)
        return items
