"""Static session provider for deployments without an auth service.

The acting user comes from the ``--user`` CLI flag or the ``[session]``
config section. Real authentication lives outside this package; any
object exposing ``current_user`` can replace this one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ordercart.domain.identity import Identity

if TYPE_CHECKING:
    from ordercart.config.settings import OrderCartSettings


class StaticSessionProvider:
    """Returns a fixed identity, or None when no user is configured."""

    def __init__(self, user: Identity | None = None) -> None:
        self._user = user

    @property
    def current_user(self) -> Identity | None:
        return self._user

    @classmethod
    def from_settings(cls, settings: OrderCartSettings) -> StaticSessionProvider:
        """``--user`` wins over ``[session] user_id``; blank ids mean no user."""
        user_id = (settings.user or settings.session.user_id or "").strip()
        if not user_id:
            return cls(None)
        name = settings.session.user_name if user_id == settings.session.user_id else None
        return cls(Identity(id=user_id, name=name))
