"""Offline schema provider reading a YAML snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..shared import SchemaCache, SchemaValidationError
from .models import TableDescriptor

SECTIONS = ("tables", "views")


class SnapshotSchemaProvider:
    """Schema provider backed by a YAML snapshot file.

    Snapshot layout::

        tables:
          - name: user
            columns:
              - {name: id, type: integer}
        views: []
    """

    def __init__(self, path: Path, cache: SchemaCache | None = None) -> None:
        self._path = Path(path)
        self._cache = cache or SchemaCache()

    def __enter__(self) -> SnapshotSchemaProvider:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _section(self, section: str) -> list[TableDescriptor]:
        data = self._cache.get(self._path)
        entries = data.get(section) or []
        if not isinstance(entries, list):
            raise SchemaValidationError(
                f"snapshot must provide a '{section}' list", str(self._path)
            )
        return [
            TableDescriptor.from_dict(entry, str(self._path), is_view=section == "views")
            for entry in entries
        ]

    def _lookup(self, table: str) -> TableDescriptor:
        for section in SECTIONS:
            for descriptor in self._section(section):
                if descriptor.name == table:
                    return descriptor
        raise SchemaValidationError(
            "table or view does not exist", str(self._path), field=table
        )

    def list_tables(self) -> list[str]:
        return [t.name for t in self._section("tables")]

    def list_views(self) -> list[str]:
        return [t.name for t in self._section("views")]

    def column_names(self, table: str) -> list[str]:
        return self._lookup(table).column_names

    def column_types(self, table: str) -> list[str]:
        return self._lookup(table).column_types

    def close(self) -> None:
        self._cache.invalidate(self._path)


def snapshot_document(tables: list[TableDescriptor]) -> dict[str, Any]:
    """Build the YAML snapshot mapping for a list of descriptors."""
    document: dict[str, Any] = {section: [] for section in SECTIONS}
    for table in tables:
        entry = table.to_dict()
        entry.pop("view")
        document["views" if table.is_view else "tables"].append(entry)
    return document
