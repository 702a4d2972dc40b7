"""Type Mapper - translates schema column types into Go struct fields."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Final, Mapping, Sequence

from ..shared import SchemaValidationError, TypeMappingError, field_name, struct_name
from .context import GeneratorContext

# Type mappings from normalised schema types to Go types
DEFAULT_GO_TYPES: Final[dict[str, str]] = {
    # booleans
    "bool": "bool",
    "boolean": "bool",
    "bit": "bool",
    # integers
    "tinyint": "int8",
    "smallint": "int16",
    "smallserial": "int16",
    "mediumint": "int32",
    "int": "int",
    "integer": "int",
    "serial": "int",
    "bigint": "int64",
    "bigserial": "int64",
    # floating point and fixed point
    "float": "float32",
    "real": "float32",
    "double": "float64",
    "double precision": "float64",
    "decimal": "float64",
    "numeric": "float64",
    # character data
    "char": "string",
    "character": "string",
    "varchar": "string",
    "character varying": "string",
    "nchar": "string",
    "nvarchar": "string",
    "text": "string",
    "tinytext": "string",
    "mediumtext": "string",
    "longtext": "string",
    "clob": "string",
    "enum": "string",
    "set": "string",
    "json": "string",
    "jsonb": "string",
    "uuid": "string",
    # temporal values are scanned as their textual form
    "date": "string",
    "datetime": "string",
    "time": "string",
    "timestamp": "string",
    "year": "string",
    "time without time zone": "string",
    "time with time zone": "string",
    "timestamp without time zone": "string",
    "timestamp with time zone": "string",
    # binary
    "binary": "[]byte",
    "varbinary": "[]byte",
    "blob": "[]byte",
    "tinyblob": "[]byte",
    "mediumblob": "[]byte",
    "longblob": "[]byte",
    "bytea": "[]byte",
}

_TYPE_ARGUMENTS = re.compile(r"\([^)]*\)")
_MODIFIERS: Final[frozenset[str]] = frozenset({"unsigned", "signed", "zerofill"})


@lru_cache(maxsize=256)
def normalize_type(source_type: str) -> str:
    """Reduce a schema type name to its mapping key.

    Examples:
        >>> normalize_type("VARCHAR(255)")
        'varchar'
        >>> normalize_type("INT(11) UNSIGNED")
        'int'
    """
    stripped = _TYPE_ARGUMENTS.sub(" ", source_type.lower())
    return " ".join(word for word in stripped.split() if word not in _MODIFIERS)


@dataclass(frozen=True, slots=True)
class StructField:
    """One Go struct field generated from a column."""

    name: str
    go_type: str
    column: str

    @property
    def tag(self) -> str:
        return f'`db:"{self.column}" json:"{self.column}"`'


class TypeMapper:
    """Maps column types to Go types and renders struct definitions."""

    def __init__(
        self,
        ctx: GeneratorContext,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self.ctx = ctx
        self._types = dict(DEFAULT_GO_TYPES)
        for source, target in (overrides or {}).items():
            self._types[normalize_type(source)] = target

    def field_spec(self, source_type: str, context: str = "column") -> str:
        """Resolve the Go type for a schema type.

        Raises:
            TypeMappingError: If no mapping exists.
        """
        mapped = self._types.get(normalize_type(source_type))
        if not mapped:
            raise TypeMappingError(source_type, context)
        return mapped

    def struct_fields(
        self,
        table_name: str,
        column_names: Sequence[str],
        column_types: Sequence[str],
    ) -> list[StructField]:
        if len(column_names) != len(column_types):
            raise SchemaValidationError(
                f"{len(column_names)} column names but {len(column_types)} column types",
                field=table_name,
            )
        return [
            StructField(
                name=field_name(column),
                go_type=self.field_spec(source_type, f"column '{table_name}.{column}'"),
                column=column,
            )
            for column, source_type in zip(column_names, column_types)
        ]

    def struct_definition(
        self,
        table_name: str,
        column_names: Sequence[str],
        column_types: Sequence[str],
        *,
        is_view: bool = False,
    ) -> str:
        """Render the Go struct declaration for one table or view."""
        fields = self.struct_fields(table_name, column_names, column_types)
        return self.ctx.render_fragment(
            "struct.go.j2",
            struct_name=struct_name(table_name),
            table_name=table_name,
            kind="view" if is_view else "table",
            fields=fields,
            name_width=max((len(f.name) for f in fields), default=0),
            type_width=max((len(f.go_type) for f in fields), default=0),
        )
