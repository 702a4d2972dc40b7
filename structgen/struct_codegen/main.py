"""
Struct Code Generator - Generates Go structs and JSON encoders from a live schema.

Four artifacts are kept in step, one fragment per table or view:
- structs.go: one struct per table
- structInterface.go: one EncodeStruct<Name> function per table
- structMap.go: table name -> encoder dispatch
- structValidMap.go: set of known table names
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..schema_provider import (
    DatabaseSchemaProvider,
    SchemaProvider,
    SnapshotSchemaProvider,
    TableDescriptor,
    describe_table,
    iter_schema_objects,
)
from ..shared import GenerationError, GeneratorConfig, SchemaError
from .artifacts import (
    ARTIFACT_GENERATORS,
    Artifact,
    ArtifactGenerator,
    check_consistency,
)
from .context import GeneratorContext
from .manifest import MANIFEST_FILENAME, dump_manifest, load_manifest
from .type_mapper import TypeMapper
from .writer import ArtifactTransaction


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Tables emitted and files written by one run."""

    tables: tuple[str, ...]
    paths: tuple[Path, ...]


class StructGenerator:
    """Drives the four artifact generators together.

    Args:
        provider: Open schema provider; its lifecycle belongs to the caller.
        output_dir: Directory receiving the generated Go files.
        ctx: Template context (carries the Go package name).
        type_mapper: Column type mapper, defaults to the built-in mapping.
    """

    def __init__(
        self,
        provider: SchemaProvider,
        output_dir: Path,
        *,
        ctx: GeneratorContext | None = None,
        type_mapper: TypeMapper | None = None,
    ) -> None:
        self.provider = provider
        self.output_dir = Path(output_dir)
        self.ctx = ctx or GeneratorContext()
        self.type_mapper = type_mapper or TypeMapper(self.ctx)
        self.generators: tuple[ArtifactGenerator, ...] = tuple(
            cls(self.ctx, self.type_mapper) for cls in ARTIFACT_GENERATORS
        )

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / MANIFEST_FILENAME

    def path_for(self, generator: ArtifactGenerator) -> Path:
        return self.output_dir / generator.filename

    def _describe(self, name: str, is_view: bool) -> TableDescriptor:
        try:
            return describe_table(self.provider, name, is_view=is_view)
        except SchemaError as e:
            raise GenerationError("introspect", str(e), table=name) from e

    def describe_schema(self) -> list[TableDescriptor]:
        """Describe every table, then every view, in provider order."""
        try:
            objects = list(iter_schema_objects(self.provider))
        except SchemaError as e:
            raise GenerationError("introspect", str(e)) from e
        return [self._describe(name, is_view) for name, is_view in objects]

    def _commit(
        self,
        artifacts: Sequence[Artifact],
        tables: Sequence[TableDescriptor],
        package: str | None = None,
    ) -> GenerationResult:
        check_consistency(artifacts)
        package = package or self.ctx.package
        with ArtifactTransaction() as txn:
            for generator, artifact in zip(self.generators, artifacts):
                txn.stage(self.path_for(generator), generator.render(artifact, package))
            txn.stage(self.manifest_path, dump_manifest(tables, package))
            paths = txn.staged_paths
        return GenerationResult(
            tables=tuple(table.name for table in tables),
            paths=tuple(paths),
        )

    def initialize_all(self) -> GenerationResult:
        """Regenerate every artifact from the current schema."""
        tables = self.describe_schema()
        artifacts = [generator.initialize(tables) for generator in self.generators]
        return self._commit(artifacts, tables)

    def append_all(self, table_name: str, *, package: str | None = None) -> GenerationResult:
        """Add one new table or view to every artifact.

        The previously emitted tables and the Go package come from the
        manifest, so their fragments are reproduced as they were; the new
        table is appended after them. An explicit ``package`` must match
        the recorded one.
        """
        manifest = load_manifest(self.manifest_path)
        if package is not None and package != manifest.package:
            raise GenerationError(
                "append",
                f"package '{package}' differs from the recorded package "
                f"'{manifest.package}'; run a full generation to change it",
                table=table_name,
            )
        previous = manifest.tables
        if table_name in {table.name for table in previous}:
            raise GenerationError(
                "append",
                "already generated; run a full generation to refresh it",
                table=table_name,
            )

        try:
            if table_name in self.provider.list_tables():
                is_view = False
            elif table_name in self.provider.list_views():
                is_view = True
            else:
                raise GenerationError("introspect", "no such table or view", table=table_name)
        except SchemaError as e:
            raise GenerationError("introspect", str(e), table=table_name) from e

        table = self._describe(table_name, is_view)
        artifacts = [
            generator.append(generator.initialize(previous), table)
            for generator in self.generators
        ]
        return self._commit(artifacts, [*previous, table], manifest.package)

    def verify(self) -> list[Path]:
        """List artifact files that differ from what the manifest renders."""
        return find_stale_artifacts(self.generators, self.output_dir)


def find_stale_artifacts(
    generators: Sequence[ArtifactGenerator],
    output_dir: Path,
    package: str | None = None,
) -> list[Path]:
    """Re-render from the manifest and report files that are missing or differ.

    Files are rendered into the recorded package unless ``package`` is given.
    """
    manifest = load_manifest(output_dir / MANIFEST_FILENAME)
    stale: list[Path] = []
    for generator in generators:
        path = output_dir / generator.filename
        expected = generator.render(
            generator.initialize(manifest.tables),
            package or manifest.package,
        )
        if not path.is_file() or path.read_text(encoding="utf-8") != expected:
            stale.append(path)
    return stale


def open_provider(
    username: str,
    password: str,
    environment: str,
    config: GeneratorConfig,
    snapshot: Path | None = None,
) -> DatabaseSchemaProvider | SnapshotSchemaProvider:
    """Open the schema source selected on the command line."""
    if snapshot is not None:
        if not snapshot.is_file():
            raise FileNotFoundError(f"Snapshot '{snapshot}' does not exist")
        return SnapshotSchemaProvider(snapshot)
    return DatabaseSchemaProvider.connect(username, password, environment, config)


def build_generator(
    provider: SchemaProvider,
    config: GeneratorConfig,
) -> StructGenerator:
    ctx = GeneratorContext(package=config.package)
    return StructGenerator(
        provider,
        config.output_dir,
        ctx=ctx,
        type_mapper=TypeMapper(ctx, config.type_overrides),
    )


def build_artifact_generators(config: GeneratorConfig) -> tuple[ArtifactGenerator, ...]:
    ctx = GeneratorContext(package=config.package)
    type_mapper = TypeMapper(ctx, config.type_overrides)
    return tuple(cls(ctx, type_mapper) for cls in ARTIFACT_GENERATORS)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to structgen.yaml (default: ./structgen.yaml if present)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated Go files",
    )
    parser.add_argument(
        "--package",
        default=None,
        help="Go package name of the generated files",
    )


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    config = GeneratorConfig.load(args.config)
    if args.output_dir is not None:
        config.output_dir = args.output_dir
    if args.package is not None:
        config.package = args.package
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Go structs and JSON encoders from database tables and views",
    )
    parser.add_argument("username", help="Database user name")
    parser.add_argument("password", help="Database password")
    parser.add_argument(
        "environment",
        help="Environment name from the config file, or a SQLAlchemy URL",
    )
    parser.add_argument(
        "--append",
        metavar="TABLE",
        default=None,
        help="Append one new table or view instead of regenerating everything",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Read the schema from a YAML snapshot instead of the database",
    )
    add_common_arguments(parser)

    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        with open_provider(
            args.username,
            args.password,
            args.environment,
            config,
            args.snapshot,
        ) as provider:
            generator = build_generator(provider, config)
            if args.append:
                result = generator.append_all(args.append, package=args.package)
                print(f"Appended '{args.append}' to {len(result.paths) - 1} artifact(s) in {config.output_dir}")
            else:
                result = generator.initialize_all()
                print(
                    f"Generated {len(result.paths) - 1} artifact(s) for "
                    f"{len(result.tables)} table(s)/view(s) into {config.output_dir}"
                )
    except (SchemaError, GenerationError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


def verify_main(argv: list[str] | None = None) -> None:
    """CLI entry point for checking generated files against the manifest."""
    parser = argparse.ArgumentParser(
        description="Check that the generated Go files match the recorded manifest",
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        stale = find_stale_artifacts(
            build_artifact_generators(config),
            config.output_dir,
            args.package,
        )
    except (SchemaError, GenerationError) as e:
        raise SystemExit(f"Error: {e}") from e

    if stale:
        for path in stale:
            print(f"  Out of date: {path}")
        raise SystemExit(f"{len(stale)} generated file(s) are out of date; rerun codegen")
    print(f"All generated files in {config.output_dir} match the manifest")


if __name__ == "__main__":
    main()
