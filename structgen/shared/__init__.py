"""Shared utilities for struct generation."""

from .schema_loader import (
    SchemaCache,
    load_schema,
    dump_schema,
)
from .naming import (
    capitalize_first,
    struct_name,
    field_name,
    encoder_name,
    go_quote,
)
from .errors import (
    SchemaError,
    SchemaValidationError,
    DialectError,
    TypeMappingError,
    SchemaConnectionError,
    GenerationError,
    ArtifactWriteError,
)
from .config import (
    EnvironmentConfig,
    GeneratorConfig,
)

__all__ = [
    # YAML loading
    "SchemaCache",
    "load_schema",
    "dump_schema",
    # Naming utilities
    "capitalize_first",
    "struct_name",
    "field_name",
    "encoder_name",
    "go_quote",
    # Errors
    "SchemaError",
    "SchemaValidationError",
    "DialectError",
    "TypeMappingError",
    "SchemaConnectionError",
    "GenerationError",
    "ArtifactWriteError",
    # Configuration
    "EnvironmentConfig",
    "GeneratorConfig",
]
