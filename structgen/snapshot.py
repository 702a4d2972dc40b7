#!/usr/bin/env python3
"""
Dump a live database schema to a YAML snapshot.

The snapshot can be fed back to ``codegen --snapshot`` to regenerate the
Go files without a database connection.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from structgen.schema_provider import (
    DatabaseSchemaProvider,
    describe_table,
    iter_schema_objects,
    snapshot_document,
)
from structgen.shared import GeneratorConfig, SchemaError, dump_schema
from structgen.struct_codegen.writer import overwrite


def take_snapshot(provider, output: Path) -> int:
    """Write the provider's tables and views to ``output``; returns the count."""
    tables = [
        describe_table(provider, name, is_view=is_view)
        for name, is_view in iter_schema_objects(provider)
    ]
    overwrite(output, dump_schema(snapshot_document(tables)))
    return len(tables)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("username", help="Database user name")
    parser.add_argument("password", help="Database password")
    parser.add_argument(
        "environment",
        help="Environment name from the config file, or a SQLAlchemy URL",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("schema.snapshot.yaml"),
        help="Snapshot file to write",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to structgen.yaml (default: ./structgen.yaml if present)",
    )
    args = parser.parse_args(argv)

    try:
        config = GeneratorConfig.load(args.config)
        with DatabaseSchemaProvider.connect(
            args.username, args.password, args.environment, config
        ) as provider:
            count = take_snapshot(provider, args.output)
    except (SchemaError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e

    print(f"Wrote {count} table(s)/view(s) to {args.output}")


if __name__ == "__main__":
    main()
