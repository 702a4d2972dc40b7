"""Schema metadata passed from providers to the generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Protocol, Sequence

from ..shared import SchemaValidationError

COLUMN_KEYS = frozenset({"name", "type"})


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """One column: its name and the opaque schema-level type tag."""

    name: str
    source_type: str


@dataclass(frozen=True, slots=True)
class TableDescriptor:
    """A table or view with its ordered columns."""

    name: str
    columns: tuple[ColumnDescriptor, ...] = ()
    is_view: bool = False

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    @property
    def column_types(self) -> list[str]:
        return [col.source_type for col in self.columns]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "view": self.is_view,
            "columns": [
                {"name": col.name, "type": col.source_type} for col in self.columns
            ],
        }

    @classmethod
    def from_dict(
        cls,
        data: Any,
        source: str | None = None,
        *,
        is_view: bool | None = None,
    ) -> TableDescriptor:
        """Build a descriptor from its YAML form, validating the shape."""
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise SchemaValidationError("entry must be a mapping with a 'name'", source)
        name = data["name"]
        raw_columns = data.get("columns") or []
        if not isinstance(raw_columns, list):
            raise SchemaValidationError("'columns' must be a list", source, field=name)

        columns: list[ColumnDescriptor] = []
        for column in raw_columns:
            if not isinstance(column, dict) or "name" not in column:
                raise SchemaValidationError("column must have a 'name'", source, field=name)
            unknown = sorted(str(key) for key in column if key not in COLUMN_KEYS)
            if unknown:
                raise SchemaValidationError(
                    f"column '{column['name']}' has unknown key(s): {', '.join(unknown)}",
                    source,
                    field=name,
                )
            if not column.get("type"):
                raise SchemaValidationError(
                    f"column '{column['name']}' is missing required 'type'",
                    source,
                    field=name,
                )
            columns.append(ColumnDescriptor(str(column["name"]), str(column["type"])))

        view = bool(data.get("view", False)) if is_view is None else is_view
        return cls(name=name, columns=tuple(columns), is_view=view)


class SchemaProvider(Protocol):
    """What the generators need from a schema source."""

    def list_tables(self) -> list[str]: ...

    def list_views(self) -> list[str]: ...

    def column_names(self, table: str) -> list[str]: ...

    def column_types(self, table: str) -> list[str]: ...

    def close(self) -> None: ...


def iter_schema_objects(provider: SchemaProvider) -> Iterator[tuple[str, bool]]:
    """Yield ``(name, is_view)`` for every table, then every view."""
    for table in provider.list_tables():
        yield table, False
    for view in provider.list_views():
        yield view, True


def describe_table(
    provider: SchemaProvider,
    name: str,
    *,
    is_view: bool = False,
) -> TableDescriptor:
    """Fetch one table's columns from the provider.

    Raises:
        SchemaValidationError: If names and types are not parallel lists.
    """
    names: Sequence[str] = provider.column_names(name)
    types: Sequence[str] = provider.column_types(name)
    if len(names) != len(types):
        raise SchemaValidationError(
            f"provider returned {len(names)} column names but {len(types)} column types",
            field=name,
        )
    return TableDescriptor(
        name=name,
        columns=tuple(ColumnDescriptor(n, t) for n, t in zip(names, types)),
        is_view=is_view,
    )
