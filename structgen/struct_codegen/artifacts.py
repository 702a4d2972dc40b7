"""Artifact generators - the four generated Go files as ordered fragment lists.

Each artifact is a fixed header plus one fragment per table or view. The
generators build fragments from table descriptors, insert them into an
:class:`Artifact` and render the whole file through a Jinja2 template, so
appending a table is a list insertion followed by a re-render.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Final, Sequence

from ..schema_provider import TableDescriptor
from ..shared import (
    GenerationError,
    SchemaError,
    encoder_name,
    go_quote,
    struct_name,
)
from .context import GeneratorContext
from .type_mapper import TypeMapper

SCHEMA_VERSION: Final[str] = "1.1"
DISPATCH_FUNCTION: Final[str] = "MapTableNameToEncoder"


class ArtifactKind(str, Enum):
    STRUCTS = "structs"
    DECODE_FUNCTIONS = "decode_functions"
    DISPATCH_TABLE = "dispatch_table"
    VALIDITY_SET = "validity_set"


@dataclass(frozen=True, slots=True)
class Fragment:
    """The text one table contributes to one artifact."""

    table_name: str
    text: str


@dataclass(frozen=True, slots=True)
class Artifact:
    """An artifact body: its fragments in processing order."""

    kind: ArtifactKind
    fragments: tuple[Fragment, ...] = ()

    @property
    def table_names(self) -> list[str]:
        return [fragment.table_name for fragment in self.fragments]

    def with_fragment(self, fragment: Fragment, position: int | None = None) -> Artifact:
        """Return a copy with ``fragment`` inserted (at the end by default)."""
        fragments = list(self.fragments)
        if position is None:
            fragments.append(fragment)
        else:
            fragments.insert(position, fragment)
        return Artifact(self.kind, tuple(fragments))


class ArtifactGenerator:
    """Base class for the per-artifact generators."""

    kind: ClassVar[ArtifactKind]
    filename: ClassVar[str]
    template_name: ClassVar[str]

    def __init__(self, ctx: GeneratorContext, type_mapper: TypeMapper) -> None:
        self.ctx = ctx
        self.type_mapper = type_mapper

    def fragment_text(self, table: TableDescriptor) -> str:
        raise NotImplementedError

    def fragment(self, table: TableDescriptor) -> Fragment:
        """Build the fragment for one table.

        Raises:
            GenerationError: If the table's metadata cannot be rendered.
        """
        try:
            text = self.fragment_text(table)
        except SchemaError as e:
            raise GenerationError("map-types", str(e), table=table.name) from e
        return Fragment(table.name, text)

    def initialize(self, tables: Sequence[TableDescriptor]) -> Artifact:
        """Build the artifact for every table, in the given order."""
        artifact = Artifact(self.kind)
        for table in tables:
            artifact = self.append(artifact, table)
        return artifact

    def append(
        self,
        artifact: Artifact,
        table: TableDescriptor,
        position: int | None = None,
    ) -> Artifact:
        """Add one table's fragment, leaving the existing fragments untouched."""
        if table.name in artifact.table_names:
            raise GenerationError(
                "append",
                f"already present in the {self.kind.value} artifact",
                table=table.name,
            )
        return artifact.with_fragment(self.fragment(table), position)

    def render_values(self) -> dict[str, Any]:
        return {"dispatch_function": DISPATCH_FUNCTION}

    def render(self, artifact: Artifact, package: str | None = None) -> str:
        """Render the complete file for an artifact, optionally into another package."""
        values = self.render_values()
        if package is not None:
            values["package"] = package
        return self.ctx.render(self.template_name, fragments=artifact.fragments, **values)


class StructsGenerator(ArtifactGenerator):
    """One struct per table, with one field per column."""

    kind = ArtifactKind.STRUCTS
    filename = "structs.go"
    template_name = "structs.go.j2"

    def fragment_text(self, table: TableDescriptor) -> str:
        return self.type_mapper.struct_definition(
            table.name,
            table.column_names,
            table.column_types,
            is_view=table.is_view,
        )


class DecodeFunctionsGenerator(ArtifactGenerator):
    """One ``EncodeStruct<Name>`` function per table."""

    kind = ArtifactKind.DECODE_FUNCTIONS
    filename = "structInterface.go"
    template_name = "decoders.go.j2"

    def fragment_text(self, table: TableDescriptor) -> str:
        name = struct_name(table.name)
        return self.ctx.render_fragment(
            "decode.go.j2",
            encoder_name=encoder_name(table.name),
            struct_name=name,
            zero_value=f"{name}{{}}",
            wrapper_value=f"Wrapper{{sa, {SCHEMA_VERSION}}}",
        )


class DispatchTableGenerator(ArtifactGenerator):
    """One name-equality branch per table inside the dispatch function."""

    kind = ArtifactKind.DISPATCH_TABLE
    filename = "structMap.go"
    template_name = "dispatch.go.j2"

    def fragment_text(self, table: TableDescriptor) -> str:
        return self.ctx.render_fragment(
            "branch.go.j2",
            table_literal=go_quote(table.name),
            encoder_name=encoder_name(table.name),
        )


class ValiditySetGenerator(ArtifactGenerator):
    """One ``"<name>": true`` entry per table."""

    kind = ArtifactKind.VALIDITY_SET
    filename = "structValidMap.go"
    template_name = "valid.go.j2"

    def fragment_text(self, table: TableDescriptor) -> str:
        return self.ctx.render_fragment("entry.go.j2", table_literal=go_quote(table.name))


# Fixed generation order
ARTIFACT_GENERATORS: Final[tuple[type[ArtifactGenerator], ...]] = (
    StructsGenerator,
    DecodeFunctionsGenerator,
    DispatchTableGenerator,
    ValiditySetGenerator,
)


def check_consistency(artifacts: Sequence[Artifact]) -> None:
    """Ensure every artifact covers the same table names.

    Raises:
        GenerationError: If any artifact differs from the first.
    """
    if not artifacts:
        return
    expected = set(artifacts[0].table_names)
    for artifact in artifacts[1:]:
        names = set(artifact.table_names)
        if names != expected:
            diff = sorted(names.symmetric_difference(expected))
            raise GenerationError(
                "consistency",
                f"{artifact.kind.value} differs from {artifacts[0].kind.value} on: "
                + ", ".join(diff),
            )
