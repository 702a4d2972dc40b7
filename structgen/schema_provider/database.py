"""Live schema introspection through SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import (
    ArgumentError,
    CompileError,
    NoSuchModuleError,
    NoSuchTableError,
    SQLAlchemyError,
)

from ..shared import (
    DialectError,
    GeneratorConfig,
    SchemaConnectionError,
    SchemaError,
    SchemaValidationError,
)
from .models import ColumnDescriptor


class DatabaseSchemaProvider:
    """Schema provider backed by a SQLAlchemy engine.

    The engine is owned by the provider and released by :meth:`close`,
    or on leaving a ``with`` block.
    """

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        self._engine = engine
        self._schema = schema
        self._inspector = inspect(engine)
        self._columns: dict[str, list[ColumnDescriptor]] = {}

    @classmethod
    def connect(
        cls,
        username: str,
        password: str,
        environment: str,
        config: GeneratorConfig | None = None,
    ) -> DatabaseSchemaProvider:
        """Open and verify a connection to the environment's database.

        Raises:
            SchemaConnectionError: If the URL is invalid or the database refuses us.
            DialectError: If the dialect or its driver is not installed.
        """
        for label, value in (("username", username), ("password", password)):
            if not value:
                raise SchemaConnectionError(environment, f"missing {label}")

        env = (config or GeneratorConfig()).environment(environment)
        try:
            url = make_url(env.url)
        except ArgumentError as e:
            raise SchemaConnectionError(environment, f"invalid database URL: {e}") from e

        # SQLite has no credentials
        if url.get_backend_name() != "sqlite":
            url = url.set(username=username, password=password)

        try:
            engine = create_engine(url)
        except (NoSuchModuleError, ImportError) as e:
            raise DialectError(str(e), url.get_backend_name()) from e

        try:
            with engine.connect():
                pass
        except SQLAlchemyError as e:
            engine.dispose()
            raise SchemaConnectionError(environment, str(e)) from e

        return cls(engine, schema=env.schema)

    def __enter__(self) -> DatabaseSchemaProvider:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _introspecting(self, table: str | None = None) -> Iterator[None]:
        try:
            yield
        except NoSuchTableError as e:
            raise SchemaValidationError("table or view does not exist", field=table) from e
        except SQLAlchemyError as e:
            raise SchemaError(f"introspection failed: {e}") from e

    def list_tables(self) -> list[str]:
        with self._introspecting():
            return list(self._inspector.get_table_names(schema=self._schema))

    def list_views(self) -> list[str]:
        with self._introspecting():
            return list(self._inspector.get_view_names(schema=self._schema))

    def _reflect(self, table: str) -> list[ColumnDescriptor]:
        cached = self._columns.get(table)
        if cached is not None:
            return cached

        with self._introspecting(table):
            raw = self._inspector.get_columns(table, schema=self._schema)
        columns = [
            ColumnDescriptor(str(col["name"]), self._type_name(col["type"])) for col in raw
        ]
        self._columns[table] = columns
        return columns

    def _type_name(self, column_type: Any) -> str:
        """Render a reflected type the way the dialect spells it."""
        try:
            return str(column_type.compile(dialect=self._engine.dialect))
        except CompileError:
            # NullType and friends have no DDL name
            return type(column_type).__name__

    def column_names(self, table: str) -> list[str]:
        return [col.name for col in self._reflect(table)]

    def column_types(self, table: str) -> list[str]:
        return [col.source_type for col in self._reflect(table)]

    def close(self) -> None:
        self._columns.clear()
        self._engine.dispose()
