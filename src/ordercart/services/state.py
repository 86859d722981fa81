"""SessionState — the explicit state object behind one cart session.

Holds every mutable slot of the session (cart, catalog, submission gate,
error slots, notification) and publishes an immutable
:class:`SessionSnapshot` to subscribers after each transition. Any
presentation layer, or none, can attach through :meth:`SessionState.subscribe`.

INVARIANT: Listener failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from pydantic import BaseModel

from ordercart.domain.cart import CartLine, CartStore
from ordercart.domain.catalog import CatalogItem
from ordercart.domain.lifecycle import CatalogLifecycle, SubmissionMachine
from ordercart.domain.types import CatalogStatus, ErrorKind, SubmissionState
from ordercart.services.notifications import Notification, NotificationSlot

logger = logging.getLogger(__name__)


class ErrorNotice(BaseModel):
    """A state-visible error (load banner or submission failure)."""

    model_config = {"frozen": True}

    kind: ErrorKind
    message: str


class SessionSnapshot(BaseModel):
    """Frozen view of the session, handed to subscribers."""

    model_config = {"frozen": True}

    catalog_status: CatalogStatus
    catalog: tuple[CatalogItem, ...]
    lines: tuple[CartLine, ...]
    total: Decimal
    submission: SubmissionState
    load_error: ErrorNotice | None = None
    submission_error: ErrorNotice | None = None
    notification: Notification | None = None


Listener = Callable[[SessionSnapshot], None]


class SessionState:
    """Mutable state for a single cart session."""

    def __init__(self) -> None:
        self.cart = CartStore()
        self.catalog_lifecycle = CatalogLifecycle()
        self.catalog: tuple[CatalogItem, ...] = ()
        self.submission = SubmissionMachine()
        self.load_error: ErrorNotice | None = None
        self.submission_error: ErrorNotice | None = None
        self.notification = NotificationSlot(on_change=self.notify)
        self._listeners: list[Listener] = []

    @property
    def catalog_status(self) -> CatalogStatus:
        return self.catalog_lifecycle.status

    def find_item(self, item_id: int) -> CatalogItem | None:
        """Look up a loaded catalog item by id."""
        for item in self.catalog:
            if item.id == item_id:
                return item
        return None

    # ------------------------------------------------------------------
    # Error slots
    # ------------------------------------------------------------------

    def set_load_error(self, message: str | None) -> None:
        self.load_error = None if message is None else ErrorNotice(kind=ErrorKind.LOAD, message=message)

    def set_submission_error(self, message: str | None) -> None:
        self.submission_error = (
            None if message is None else ErrorNotice(kind=ErrorKind.SUBMISSION, message=message)
        )

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            catalog_status=self.catalog_status,
            catalog=self.catalog,
            lines=self.cart.lines(),
            total=self.cart.total(),
            submission=self.submission.state,
            load_error=self.load_error,
            submission_error=self.submission_error,
            notification=self.notification.current,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        """Push a fresh snapshot to every listener."""
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.warning("Session listener %r failed", listener, exc_info=True)
