# This file implements the backing store contract on top of SQLAlchemy Core.
# It exists so the resource layer can run against Postgres in production and SQLite in tests unchanged.
# Tables are reflected once into a shared MetaData; queries are built from column objects, never from strings.
# Driver and SQLAlchemy exceptions are translated into the store error classes before leaving this module.

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import MetaData, Table, delete, func, insert, select, text, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    NoSuchTableError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.sql.elements import ColumnElement

from fairway.resources.store import (
    EXECUTE_SQL_PROCEDURE,
    StoreConnectionError,
    StoreConstraintError,
    StoreError,
    StoreNoRowsError,
    StoreQueryError,
    StoreResult,
)

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_PREDICATES: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "eq": lambda column, value: column == value,
    "neq": lambda column, value: column != value,
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
    "like": lambda column, value: column.like(value),
    "ilike": lambda column, value: column.ilike(value),
    "in": lambda column, value: column.in_(list(value)),
    "contains": lambda column, value: column.contains(value),
}


def _validate_identifier(identifier: str) -> str:
    if not _IDENTIFIER_RE.match(identifier):
        raise StoreQueryError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


def _translate_error(exc: SQLAlchemyError) -> StoreError:
    if isinstance(exc, IntegrityError):
        return StoreConstraintError("The store rejected the write.", cause=exc)
    if isinstance(exc, OperationalError | InterfaceError):
        return StoreConnectionError("The store connection failed.", cause=exc)
    return StoreQueryError("The store could not run the query.", cause=exc)


class SqlAlchemyStore:
    """Table store backed by a SQLAlchemy engine.

    The engine owns pooling. A store instance is a lightweight handle meant to
    be created per request; pass a shared ``metadata`` to avoid reflecting the
    same tables again for every handle.
    """

    def __init__(self, engine: Engine, *, metadata: MetaData | None = None) -> None:
        self._engine = engine
        self._metadata = metadata if metadata is not None else MetaData()

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table(self, name: str) -> SqlTableQuery:
        return SqlTableQuery(self, name)

    def resolve_table(self, name: str) -> Table:
        _validate_identifier(name)
        existing = self._metadata.tables.get(name)
        if existing is not None:
            return existing
        try:
            return Table(name, self._metadata, autoload_with=self._engine)
        except NoSuchTableError as exc:
            raise StoreQueryError(f"Unknown table: {name!r}", cause=exc) from exc
        except SQLAlchemyError as exc:
            raise _translate_error(exc) from exc

    def run(self, operation: Callable[[Connection], StoreResult]) -> StoreResult:
        """Run ``operation`` inside one transaction, translating store failures."""

        try:
            with self._engine.begin() as connection:
                return operation(connection)
        except SQLAlchemyError as exc:
            raise _translate_error(exc) from exc

    def rpc(self, function: str, params: Mapping[str, Any] | None = None) -> StoreResult:
        arguments = dict(params or {})

        def _call(connection: Connection) -> StoreResult:
            if function == EXECUTE_SQL_PROCEDURE:
                query = str(arguments.get("query") or "")
                positional = tuple(arguments.get("params") or ())
                result = connection.exec_driver_sql(query, positional)
            else:
                name = _validate_identifier(function)
                binds = ", ".join(
                    f"{_validate_identifier(key)} => :{key}" for key in arguments
                )
                result = connection.execute(text(f"SELECT * FROM {name}({binds})"), arguments)
            rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
            return StoreResult(data=rows, count=len(rows))

        return self.run(_call)


class SqlTableQuery:
    """Chainable query for one table; nothing touches the database until ``execute``."""

    def __init__(self, store: SqlAlchemyStore, table_name: str) -> None:
        self._store = store
        self._table_name = table_name
        self._action = "select"
        self._payload: Any = None
        self._count_mode: str | None = None
        self._head = False
        self._predicates: list[tuple[str, str, Any]] = []
        self._orderings: list[tuple[str, bool]] = []
        self._range: tuple[int, int] | None = None
        self._single = False

    def select(self, *, count: str | None = None, head: bool = False) -> SqlTableQuery:
        self._action = "select"
        self._count_mode = count
        self._head = head
        return self

    def insert(self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> SqlTableQuery:
        self._action = "insert"
        self._payload = [dict(rows)] if isinstance(rows, Mapping) else [dict(row) for row in rows]
        return self

    def update(self, values: Mapping[str, Any]) -> SqlTableQuery:
        self._action = "update"
        self._payload = dict(values)
        return self

    def delete(self) -> SqlTableQuery:
        self._action = "delete"
        return self

    def _where(self, operator: str, column: str, value: Any) -> SqlTableQuery:
        self._predicates.append((operator, column, value))
        return self

    def eq(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("eq", column, value)

    def neq(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("neq", column, value)

    def gt(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("gt", column, value)

    def gte(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("gte", column, value)

    def lt(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("lt", column, value)

    def lte(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("lte", column, value)

    def like(self, column: str, pattern: str) -> SqlTableQuery:
        return self._where("like", column, pattern)

    def ilike(self, column: str, pattern: str) -> SqlTableQuery:
        return self._where("ilike", column, pattern)

    def in_(self, column: str, values: Sequence[Any]) -> SqlTableQuery:
        return self._where("in", column, values)

    def contains(self, column: str, value: Any) -> SqlTableQuery:
        return self._where("contains", column, value)

    def order(self, column: str, *, ascending: bool = True) -> SqlTableQuery:
        self._orderings.append((column, ascending))
        return self

    def range(self, start: int, end: int) -> SqlTableQuery:
        self._range = (start, end)
        return self

    def single(self) -> SqlTableQuery:
        self._single = True
        return self

    def execute(self) -> StoreResult:
        table = self._store.resolve_table(self._table_name)
        try:
            conditions = [
                _PREDICATES[operator](self._column(table, column), value)
                for operator, column, value in self._predicates
            ]
        except (TypeError, ValueError, NotImplementedError, SQLAlchemyError) as exc:
            raise StoreQueryError("The store could not build the filter.", cause=exc) from exc

        if self._action == "insert":
            return self._store.run(lambda connection: self._run_insert(connection, table))
        if self._action == "update":
            return self._store.run(lambda connection: self._run_update(connection, table, conditions))
        if self._action == "delete":
            return self._store.run(lambda connection: self._run_delete(connection, table, conditions))
        return self._store.run(lambda connection: self._run_select(connection, table, conditions))

    def _column(self, table: Table, name: str) -> Any:
        column = table.c.get(name)
        if column is None:
            raise StoreQueryError(f"Unknown column {name!r} on table {table.name!r}")
        return column

    def _shape(self, rows: list[dict[str, Any]]) -> Any:
        if not self._single:
            return rows
        if not rows:
            raise StoreNoRowsError(f"No rows matched in {self._table_name!r}")
        if len(rows) > 1:
            raise StoreQueryError(f"Expected one row from {self._table_name!r}, got {len(rows)}")
        return rows[0]

    def _run_select(
        self, connection: Connection, table: Table, conditions: list[ColumnElement[bool]]
    ) -> StoreResult:
        total: int | None = None
        if self._count_mode == "exact":
            count_query = select(func.count()).select_from(table).where(*conditions)
            total = int(connection.execute(count_query).scalar_one())
        if self._head:
            return StoreResult(data=None, count=total)

        query = select(table).where(*conditions)
        for column, ascending in self._orderings:
            target = self._column(table, column)
            query = query.order_by(target.asc() if ascending else target.desc())
        if self._range is not None:
            start, end = self._range
            query = query.offset(max(start, 0)).limit(max(end - start + 1, 0))

        rows = [dict(row) for row in connection.execute(query).mappings().all()]
        return StoreResult(data=self._shape(rows), count=total)

    def _run_insert(self, connection: Connection, table: Table) -> StoreResult:
        rows_in: list[dict[str, Any]] = self._payload or []
        if not rows_in:
            return StoreResult(data=self._shape([]), count=0)
        statement = insert(table).returning(*table.c, sort_by_parameter_order=True)
        rows = [dict(row) for row in connection.execute(statement, rows_in).mappings().all()]
        return StoreResult(data=self._shape(rows), count=len(rows))

    def _run_update(
        self, connection: Connection, table: Table, conditions: list[ColumnElement[bool]]
    ) -> StoreResult:
        statement = update(table).where(*conditions).values(**self._payload).returning(*table.c)
        rows = [dict(row) for row in connection.execute(statement).mappings().all()]
        return StoreResult(data=self._shape(rows), count=len(rows))

    def _run_delete(
        self, connection: Connection, table: Table, conditions: list[ColumnElement[bool]]
    ) -> StoreResult:
        result = connection.execute(delete(table).where(*conditions))
        return StoreResult(data=None, count=result.rowcount)
