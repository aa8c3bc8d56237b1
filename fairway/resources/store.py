# This file defines the backing store contract the resource layer is written against.
# It exists so services depend on a small query-builder surface instead of a concrete database client.
# Any client exposing select/insert/update/delete, predicate builders, ordering, ranges and exact counts fits.
# Store failures are raised as the exception classes below so callers can classify them without parsing text.

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


EXECUTE_SQL_PROCEDURE = "execute_sql"


class StoreError(Exception):
    """Base class for failures reported by the backing store."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreNoRowsError(StoreError):
    """A single-row request matched zero rows."""


class StoreConstraintError(StoreError):
    """The store rejected a write because of a uniqueness, foreign-key or check rule."""


class StoreConnectionError(StoreError):
    """The store could not be reached or dropped the connection."""


class StoreQueryError(StoreError):
    """Any other failure reported while running a query."""


@dataclass(frozen=True)
class StoreResult:
    data: Any
    count: int | None = None


class TableQuery(Protocol):
    """Chainable query builder for one table. Every builder method returns the query."""

    def select(self, *, count: str | None = None, head: bool = False) -> TableQuery: ...

    def insert(self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> TableQuery: ...

    def update(self, values: Mapping[str, Any]) -> TableQuery: ...

    def delete(self) -> TableQuery: ...

    def eq(self, column: str, value: Any) -> TableQuery: ...

    def neq(self, column: str, value: Any) -> TableQuery: ...

    def gt(self, column: str, value: Any) -> TableQuery: ...

    def gte(self, column: str, value: Any) -> TableQuery: ...

    def lt(self, column: str, value: Any) -> TableQuery: ...

    def lte(self, column: str, value: Any) -> TableQuery: ...

    def like(self, column: str, pattern: str) -> TableQuery: ...

    def ilike(self, column: str, pattern: str) -> TableQuery: ...

    def in_(self, column: str, values: Sequence[Any]) -> TableQuery: ...

    def contains(self, column: str, value: Any) -> TableQuery: ...

    def order(self, column: str, *, ascending: bool = True) -> TableQuery: ...

    def range(self, start: int, end: int) -> TableQuery: ...

    def single(self) -> TableQuery: ...

    def execute(self) -> StoreResult: ...


class TableStore(Protocol):
    """Entry point of a backing store: table queries plus named procedures."""

    def table(self, name: str) -> TableQuery: ...

    def rpc(self, function: str, params: Mapping[str, Any] | None = None) -> StoreResult: ...
