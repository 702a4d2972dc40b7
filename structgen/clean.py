#!/usr/bin/env python3
"""
Remove generated Go files and the generation manifest.

Removes:
- structs.go, structInterface.go, structMap.go, structValidMap.go
- structgen.manifest.yaml
- leftover temporary files from interrupted writes
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterator

from structgen.shared import GeneratorConfig, SchemaError
from structgen.struct_codegen.artifacts import ARTIFACT_GENERATORS
from structgen.struct_codegen.manifest import MANIFEST_FILENAME


def generated_files(output_dir: Path) -> Iterator[Path]:
    """Yield every file the generator may have written under output_dir."""
    names = [cls.filename for cls in ARTIFACT_GENERATORS] + [MANIFEST_FILENAME]
    for name in names:
        yield output_dir / name
        yield output_dir / f".{name}.tmp"


def format_size(size_bytes: float) -> str:
    """Format size in human-readable form."""
    for unit in ("B", "KB", "MB", "GB"):
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def clean_file(path: Path, *, dry_run: bool = False) -> int:
    """Clean a file, returning bytes freed."""
    if not path.exists():
        return 0

    size = path.stat().st_size
    if dry_run:
        print(f"  Would remove: {path} - {format_size(size)}")
    else:
        print(f"  Removing: {path} - {format_size(size)}")
        path.unlink()
    return size


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be cleaned without removing anything",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory holding the generated Go files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to structgen.yaml (default: ./structgen.yaml if present)",
    )
    args = parser.parse_args(argv)

    if args.output_dir is not None:
        output_dir = args.output_dir
    else:
        try:
            output_dir = GeneratorConfig.load(args.config).output_dir
        except SchemaError as e:
            raise SystemExit(f"Error: {e}") from e

    total_freed = 0
    print(f"Cleaning generated code in {output_dir}...")
    for path in generated_files(output_dir):
        total_freed += clean_file(path, dry_run=args.dry_run)

    action = "Would free" if args.dry_run else "Freed"
    print(f"\n{action}: {format_size(total_freed)}")

    if args.dry_run:
        print("\nRun without --dry-run to actually clean.")


if __name__ == "__main__":
    main()
