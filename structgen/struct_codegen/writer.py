"""File writing for generated artifacts.

Artifacts are staged in memory and committed together: if any write fails,
the files already written in that commit are restored to their previous
content (or removed when they did not exist before).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from ..shared import ArtifactWriteError


def overwrite(path: Path, content: str) -> None:
    """Replace a file's content atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f".{path.name}.tmp")
    temp_path.write_text(content, encoding="utf-8")
    os.replace(temp_path, path)


class ArtifactTransaction:
    """Stage several file contents and write them all or none.

    Usable as a context manager; staged writes are committed when the
    block exits without an exception and discarded otherwise.
    """

    def __init__(self) -> None:
        self._staged: dict[Path, str] = {}

    def __enter__(self) -> ArtifactTransaction:
        return self

    def __exit__(self, exc_type: Any, *exc_info: Any) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.discard()

    @property
    def staged_paths(self) -> list[Path]:
        return list(self._staged)

    def stage(self, path: Path, content: str) -> None:
        self._staged[path] = content

    def discard(self) -> None:
        self._staged.clear()

    def commit(self) -> list[Path]:
        """Write every staged file.

        Returns:
            The written paths, in staging order.

        Raises:
            ArtifactWriteError: If a file cannot be read or written. Files
                written earlier in the same commit are rolled back first.
        """
        previous: dict[Path, str | None] = {}
        for path in self._staged:
            try:
                previous[path] = path.read_text(encoding="utf-8") if path.exists() else None
            except OSError as e:
                raise ArtifactWriteError(path, f"cannot read current content: {e}") from e

        written: list[Path] = []
        for path, content in self._staged.items():
            try:
                overwrite(path, content)
            except OSError as e:
                self._rollback(written, previous)
                raise ArtifactWriteError(path, str(e)) from e
            written.append(path)

        self._staged.clear()
        return written

    @staticmethod
    def _rollback(written: list[Path], previous: dict[Path, str | None]) -> None:
        for path in reversed(written):
            original = previous[path]
            if original is None:
                path.unlink(missing_ok=True)
            else:
                overwrite(path, original)
