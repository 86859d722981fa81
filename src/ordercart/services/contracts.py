"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``lines`` vs ``items``)
fail fast in tests and during development. Money travels as strings so
payloads stay JSON-safe without losing decimal precision.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class CatalogItemData(BaseModel):
    """One menu row."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    price: str
    description: str | None = None
    category: str | None = None


class CatalogResultData(BaseModel):
    """Payload contract for ``CatalogLoader.load``."""

    status: Literal["loading", "ready", "error"]
    count: int
    items: list[CatalogItemData]


class CartLineData(BaseModel):
    """One cart line."""

    id: int
    name: str
    price: str
    quantity: int = Field(ge=1)
    subtotal: str


class CartResultData(BaseModel):
    """Payload contract for cart operations on ``OrderSession``."""

    changed: bool
    count: int
    item_count: int
    total: str
    lines: list[CartLineData]


class OrderLineData(BaseModel):
    """One line inside a submitted order."""

    id: int
    name: str
    price: str
    quantity: int = Field(ge=1)


class OrderData(BaseModel):
    """A submitted or stored order."""

    id: str
    user_id: str
    status: str
    submitted_at: str
    total: str
    items: list[OrderLineData]


class SubmitResultData(BaseModel):
    """Payload contract for ``OrderSubmitter.submit``."""

    submitted: bool
    reason: Literal["no_user", "empty_cart", "in_flight"] | None = None
    order: OrderData | None = None
    notification: str | None = None


class OrderListResultData(BaseModel):
    """Payload contract for order history listings."""

    count: int
    items: list[OrderData]


class ImportResultData(BaseModel):
    """Payload contract for menu imports."""

    path: str
    count: int
    replaced: bool
