"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ordercart.toml only contains
overrides. A fresh store needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- ordercart.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    dirname: str = ".ordercart"
    db_name: str = "ordercart.db"


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    fetch_timeout_seconds: float | None = Field(default=10.0, gt=0)
    error_message: str = "Failed to load menu items"


class OrdersConfig(BaseModel):
    """[orders] section."""

    model_config = {"frozen": True}

    notification_seconds: float = Field(default=6.0, ge=0)
    timeout_seconds: float | None = Field(default=30.0, gt=0)
    success_message: str = "Order submitted successfully!"
    failure_message: str = "Failed to submit order"
    currency: str = "$"


class SessionConfig(BaseModel):
    """[session] section — the static identity used when no auth is wired."""

    model_config = {"frozen": True}

    user_id: str | None = None
    user_name: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
