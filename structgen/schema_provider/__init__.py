"""Schema providers - table, view and column metadata sources."""

from .models import (
    ColumnDescriptor,
    TableDescriptor,
    SchemaProvider,
    describe_table,
    iter_schema_objects,
)
from .database import DatabaseSchemaProvider
from .snapshot import SnapshotSchemaProvider, snapshot_document

__all__ = [
    "ColumnDescriptor",
    "TableDescriptor",
    "SchemaProvider",
    "describe_table",
    "iter_schema_objects",
    "DatabaseSchemaProvider",
    "SnapshotSchemaProvider",
    "snapshot_document",
]
