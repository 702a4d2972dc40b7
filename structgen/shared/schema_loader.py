"""YAML loading for snapshots, manifests and config, with a per-file cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import SchemaError


@dataclass(frozen=True, slots=True)
class FileStamp:
    """Identifies one version of a file by modification time and size."""

    mtime_ns: int
    size: int

    @classmethod
    def of(cls, path: Path) -> FileStamp:
        stat = path.stat()
        return cls(mtime_ns=stat.st_mtime_ns, size=stat.st_size)


class SchemaCache:
    """Parsed YAML documents keyed by path.

    A snapshot provider reads the same document once per table it
    describes; the cache parses each version of the file only once and
    reloads it after the file is rewritten.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[Path, tuple[FileStamp, dict[str, Any]]] = {}

    def get(self, path: Path) -> dict[str, Any]:
        """Get a document from cache, loading it if necessary.

        Raises:
            SchemaError: If the file is missing or invalid.
        """
        resolved = path.resolve()
        try:
            stamp = FileStamp.of(resolved)
        except OSError as e:
            raise SchemaError(f"Failed to read schema file: {e}", str(path)) from e

        entry = self._entries.get(resolved)
        if entry is not None and entry[0] == stamp:
            return entry[1]

        data = load_schema(resolved)
        self._entries[resolved] = (stamp, data)
        return data

    def invalidate(self, path: Path | None = None) -> None:
        """Drop one cached document, or all of them."""
        if path is None:
            self._entries.clear()
        else:
            self._entries.pop(path.resolve(), None)

    def __len__(self) -> int:
        return len(self._entries)


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a YAML mapping from disk.

    Args:
        schema_path: Path to the YAML file.

    Returns:
        The parsed dictionary.

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read schema file: {e}", str(schema_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}", str(schema_path)) from e

    if not isinstance(data, dict):
        raise SchemaError("Schema root must be a mapping", str(schema_path))

    return data


def dump_schema(data: dict[str, Any]) -> str:
    """Serialize a mapping to YAML, keeping key order."""
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
