"""MenuService — seed the local catalog store from a menu file."""

from __future__ import annotations

from pathlib import Path

from ordercart.infrastructure.menu_file import MenuFileError, load_menu_file
from ordercart.services.base import BaseService
from ordercart.services.contracts import ImportResultData, dump_validated
from ordercart.services.result import ServiceResult
from ordercart.services.telemetry import trace_span, traced


class MenuService(BaseService):
    """Loads menu files into the catalog table."""

    @traced
    def import_file(self, path: Path, *, replace: bool = False) -> ServiceResult:
        """Import every item in *path*; *replace* hides items not listed."""
        op = "menu_import"
        try:
            with trace_span("parse_menu"):
                items = load_menu_file(path)
        except MenuFileError as exc:
            return ServiceResult.failure(op, "INVALID_MENU", str(exc), detail={"path": str(path)})

        with trace_span("store_menu"):
            count = self._backend.catalog_store.import_items(items, replace=replace)

        warnings: list[str] = []
        if count == 0:
            warnings.append(f"{path} contains no items")
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ImportResultData,
                {"path": str(path), "count": count, "replaced": replace},
            ),
            warnings=warnings,
        )
