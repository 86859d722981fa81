"""Tests for payload contracts."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ordercart.services.contracts import (
    CartResultData,
    CatalogResultData,
    SubmitResultData,
    dump_validated,
)


class TestDumpValidated:
    def test_normalizes_defaults(self) -> None:
        data = dump_validated(SubmitResultData, {"submitted": False, "reason": "empty_cart"})
        assert data == {
            "submitted": False,
            "reason": "empty_cart",
            "order": None,
            "notification": None,
        }

    def test_unknown_reason_rejected(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(SubmitResultData, {"submitted": False, "reason": "tired"})

    def test_catalog_status_literal(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(CatalogResultData, {"status": "done", "count": 0, "items": []})

    def test_cart_line_quantity_must_be_positive(self) -> None:
        payload = {
            "changed": True,
            "count": 1,
            "item_count": 0,
            "total": "0",
            "lines": [{"id": 1, "name": "x", "price": "1", "quantity": 0, "subtotal": "0"}],
        }
        with pytest.raises(ValidationError):
            dump_validated(CartResultData, payload)
