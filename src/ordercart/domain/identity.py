"""Acting-user identity supplied by the session provider."""

from __future__ import annotations

from pydantic import BaseModel


class Identity(BaseModel):
    """Authenticated user attached to submitted orders."""

    model_config = {"frozen": True}

    id: str
    name: str | None = None
