#!/usr/bin/env python3
"""
Unified CLI for structgen.

Usage:
    python -m structgen <command> [options]

Commands:
    codegen     Generate (or append to) the Go struct files
    snapshot    Dump a live schema to a YAML snapshot
    verify      Check generated files against the manifest
    clean       Remove generated files

Examples:
    python -m structgen codegen app secret production
    python -m structgen codegen app secret production --append invoices
    python -m structgen snapshot app secret staging -o schema.yaml
    python -m structgen verify --output-dir structs
    python -m structgen clean --dry-run
"""

from __future__ import annotations

import sys


def _run(entry, args: list[str]) -> int:
    try:
        entry(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, int):
            return e.code
        if e.code:
            print(e.code, file=sys.stderr)
            return 1
        return 0


def cmd_codegen(args: list[str]) -> int:
    """Generate the Go struct files."""
    from structgen.struct_codegen import main as codegen
    return _run(codegen.main, args)


def cmd_snapshot(args: list[str]) -> int:
    """Dump a live schema to YAML."""
    from structgen import snapshot
    return _run(snapshot.main, args)


def cmd_verify(args: list[str]) -> int:
    """Check generated files against the manifest."""
    from structgen.struct_codegen import main as codegen
    return _run(codegen.verify_main, args)


def cmd_clean(args: list[str]) -> int:
    """Remove generated files."""
    from structgen import clean
    return _run(clean.main, args)


COMMANDS = {
    "codegen": (cmd_codegen, "Generate (or append to) the Go struct files"),
    "snapshot": (cmd_snapshot, "Dump a live schema to a YAML snapshot"),
    "verify": (cmd_verify, "Check generated files against the manifest"),
    "clean": (cmd_clean, "Remove generated files"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
