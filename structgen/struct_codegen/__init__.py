"""Struct Code Generator - Generates Go structs and JSON encoders from a live schema."""

from .artifacts import (
    ARTIFACT_GENERATORS,
    SCHEMA_VERSION,
    Artifact,
    ArtifactKind,
    Fragment,
    StructsGenerator,
    DecodeFunctionsGenerator,
    DispatchTableGenerator,
    ValiditySetGenerator,
)
from .context import GeneratorContext
from .main import GenerationResult, StructGenerator
from .type_mapper import DEFAULT_GO_TYPES, TypeMapper

__all__ = [
    "ARTIFACT_GENERATORS",
    "SCHEMA_VERSION",
    "Artifact",
    "ArtifactKind",
    "Fragment",
    "StructsGenerator",
    "DecodeFunctionsGenerator",
    "DispatchTableGenerator",
    "ValiditySetGenerator",
    "GeneratorContext",
    "GenerationResult",
    "StructGenerator",
    "DEFAULT_GO_TYPES",
    "TypeMapper",
]
