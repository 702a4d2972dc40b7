"""Custom exceptions for struct generation."""

from __future__ import annotations

from pathlib import Path


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when schema metadata or a YAML document fails validation."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class DialectError(SchemaError):
    """Raised when a database dialect or its driver is unavailable."""

    def __init__(
        self,
        message: str,
        dialect: str,
        schema_path: str | None = None,
    ) -> None:
        self.dialect = dialect
        super().__init__(f"Dialect '{dialect}': {message}", schema_path)


class TypeMappingError(SchemaError):
    """Raised when a column type has no Go mapping."""

    def __init__(
        self,
        type_name: str,
        context: str,
        schema_path: str | None = None,
    ) -> None:
        self.type_name = type_name
        super().__init__(f"No type mapping for '{type_name}' ({context})", schema_path)


class SchemaConnectionError(SchemaError):
    """Raised when the schema database cannot be reached."""

    def __init__(self, environment: str, message: str) -> None:
        self.environment = environment
        super().__init__(f"Cannot connect to environment '{environment}': {message}")


class GenerationError(Exception):
    """Raised when a generation step fails.

    The message names the step and, when known, the table being processed.
    """

    def __init__(self, step: str, message: str, table: str | None = None) -> None:
        self.step = step
        self.table = table
        prefix = f"{step} failed" if not table else f"{step} failed for '{table}'"
        super().__init__(f"{prefix}: {message}")


class ArtifactWriteError(GenerationError):
    """Raised when a generated file cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__("write", f"{path}: {message}")
