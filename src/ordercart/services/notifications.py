"""Transient notification slot with timed auto-dismissal.

A published notification stays visible until its TTL elapses on the
running event loop or until :meth:`NotificationSlot.dismiss` is called,
whichever comes first. Publishing again replaces the current message and
restarts the timer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """A short-lived message for the presentation layer."""

    model_config = {"frozen": True}

    message: str
    level: Literal["success", "info"] = "success"
    ttl: float = Field(default=6.0, ge=0)


class NotificationSlot:
    """Holds at most one notification at a time."""

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self._current: Notification | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._on_change = on_change

    @property
    def current(self) -> Notification | None:
        return self._current

    def publish(self, message: str, *, ttl: float, level: str = "success") -> Notification:
        """Show *message*, auto-dismissing after *ttl* seconds (0 = never)."""
        self._cancel_timer()
        notification = Notification(message=message, level=level, ttl=ttl)
        self._current = notification
        if ttl > 0:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running loop; notification will not auto-dismiss")
            else:
                self._handle = loop.call_later(ttl, self._expire, notification)
        self._changed()
        return notification

    def dismiss(self) -> bool:
        """Clear the current notification now. Returns False if none was shown."""
        self._cancel_timer()
        if self._current is None:
            return False
        self._current = None
        self._changed()
        return True

    def _expire(self, notification: Notification) -> None:
        # A newer publish replaces the handle, so only the matching one clears.
        if self._current is notification:
            self._handle = None
            self._current = None
            self._changed()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
