#!/usr/bin/env python3
"""
Convenience wrapper for structgen.

Forwards to the structgen module. Run with --help to see available commands.
Relative paths (--output-dir, --snapshot, --config) are resolved against the
directory the wrapper is run from.

Usage:
    python generate.py <command> [options]

Examples:
    python generate.py codegen app secret production
    python generate.py codegen app secret production --append invoices
    python generate.py verify
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def child_env() -> dict[str, str]:
    """Environment with the project root importable, keeping any existing PYTHONPATH."""
    env = dict(os.environ)
    paths = [str(ROOT)]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def main() -> int:
    """Forward all arguments to the structgen module."""
    return subprocess.call(
        [sys.executable, "-m", "structgen"] + sys.argv[1:],
        env=child_env(),
    )


if __name__ == "__main__":
    sys.exit(main())
