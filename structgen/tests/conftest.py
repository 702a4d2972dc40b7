"""Shared fixtures: a small SQLite schema and its YAML snapshot."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine

SNAPSHOT_YAML = """\
tables:
  - name: user
    columns:
      - {name: id, type: integer}
      - {name: name, type: text}
  - name: orders
    columns:
      - {name: id, type: bigint}
      - {name: userId, type: int(11) unsigned}
      - {name: total, type: "decimal(10,2)"}
      - {name: placed_at, type: datetime}
views:
  - name: user_names
    columns:
      - {name: name, type: varchar(255)}
"""


def write_snapshot(path: Path, content: str = SNAPSHOT_YAML) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def snapshot_path(tmp_path) -> Path:
    return write_snapshot(tmp_path / "schema.yaml")


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """A SQLite database with two tables and one view."""
    url = f"sqlite:///{tmp_path / 'app.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE user (id INTEGER, name TEXT)")
        conn.exec_driver_sql(
            "CREATE TABLE orders (id INTEGER, total NUMERIC, placed_at DATETIME)"
        )
        conn.exec_driver_sql("CREATE VIEW user_names AS SELECT id, name FROM user")
    engine.dispose()
    return url
