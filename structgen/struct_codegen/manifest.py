"""Manifest of the tables emitted into the generated artifacts.

The manifest is what lets an append re-render the artifacts without
re-reading the rest of the schema. It also records the Go package the
artifacts were rendered into, so later appends keep it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final, Sequence

from ..schema_provider import TableDescriptor
from ..shared import GenerationError, SchemaError, dump_schema, load_schema

MANIFEST_FILENAME: Final[str] = "structgen.manifest.yaml"
MANIFEST_VERSION: Final[int] = 1


@dataclass(frozen=True, slots=True)
class Manifest:
    """Package and tables recorded by the last generation run."""

    package: str
    tables: list[TableDescriptor]


def dump_manifest(tables: Sequence[TableDescriptor], package: str) -> str:
    """Serialize the emitted tables, in emission order."""
    return dump_schema(
        {
            "version": MANIFEST_VERSION,
            "package": package,
            "tables": [table.to_dict() for table in tables],
        }
    )


def load_manifest(path: Path) -> Manifest:
    """Read back the package and tables recorded by the last generation run.

    Raises:
        GenerationError: If the manifest is missing or malformed.
    """
    if not path.is_file():
        raise GenerationError(
            "manifest",
            f"{path} not found; run a full generation before appending",
        )
    try:
        data = load_schema(path)
        package = data.get("package")
        if not isinstance(package, str) or not package.isidentifier():
            raise SchemaError("manifest must record the Go 'package'", str(path))
        entries = data.get("tables")
        if not isinstance(entries, list):
            raise SchemaError("manifest must provide a 'tables' list", str(path))
        tables = [TableDescriptor.from_dict(entry, str(path)) for entry in entries]
    except SchemaError as e:
        raise GenerationError("manifest", str(e)) from e
    return Manifest(package=package, tables=tables)
