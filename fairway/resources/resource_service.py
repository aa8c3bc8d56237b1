# This file implements generic CRUD operations over any table of the backing store.
# It exists so feature services only add domain query shaping instead of repeating store plumbing.
# Every operation is one store round trip that resolves to an envelope; store failures never escape as exceptions.
# Keys are converted to snake_case before writes and back to camelCase on every row that is returned.

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from fairway.resources.base_service import BaseService
from fairway.resources.errors import (
    ErrorCode,
    ServiceError,
    code_for_store_error,
    is_expected,
)
from fairway.resources.key_case import to_app_case, to_store_case
from fairway.resources.query_parser import FilterSpec, QueryParser
from fairway.resources.response_envelope import (
    PaginatedResponse,
    ServiceResponse,
    create_error_response,
    create_paginated_error_response,
    create_paginated_response,
    create_success_response,
)
from fairway.resources.store import EXECUTE_SQL_PROCEDURE, TableQuery, TableStore

Record = dict[str, Any]

_TABLE_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _require_table(table: str) -> str:
    if not isinstance(table, str) or not table.strip():
        raise ValueError("A table name is required.")
    if not _TABLE_NAME_RE.match(table):
        raise ValueError(f"Unsafe table name: {table!r}")
    return table


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list | tuple | set | frozenset):
        return list(value)
    return [value]


_FILTER_APPLIERS: dict[str, Callable[[TableQuery, str, Any], TableQuery]] = {
    "eq": lambda query, field, value: query.eq(field, value),
    "neq": lambda query, field, value: query.neq(field, value),
    "gt": lambda query, field, value: query.gt(field, value),
    "gte": lambda query, field, value: query.gte(field, value),
    "lt": lambda query, field, value: query.lt(field, value),
    "lte": lambda query, field, value: query.lte(field, value),
    "like": lambda query, field, value: query.like(field, f"%{value}%"),
    "ilike": lambda query, field, value: query.ilike(field, f"%{value}%"),
    "in": lambda query, field, value: query.in_(field, _as_list(value)),
    "contains": lambda query, field, value: query.contains(field, value),
}


def apply_filters(query: TableQuery, filters: Sequence[FilterSpec]) -> TableQuery:
    """Apply parsed filters to a store query using the operator mapping."""

    for spec in filters:
        applier = _FILTER_APPLIERS.get(spec.operator)
        if applier is None:
            continue
        query = applier(query, spec.field, spec.value)
    return query


class ResourceService(BaseService):
    """Generic CRUD over the backing store returning envelopes."""

    def __init__(
        self,
        store: TableStore,
        *,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        parser: QueryParser | None = None,
    ) -> None:
        super().__init__(store, logger=logger, sleep=sleep)
        self.parser = parser or QueryParser()

    def table(self, name: str) -> TableResource:
        return TableResource(self, name)

    def fetch_by_id(
        self, table: str, record_id: Any, *, app_case: bool = True
    ) -> ServiceResponse[Record]:
        table = _require_table(table)
        try:
            result = self.store.table(table).select().eq("id", record_id).single().execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to fetch record from {table}",
                ErrorCode.DB_NOT_FOUND,
                {"table": table, "id": record_id},
            )
            return create_error_response(error)
        return create_success_response(self._present(result.data, app_case))

    def fetch_records(
        self,
        table: str,
        query_params: Mapping[str, Any] | None = None,
        *,
        default_direction: str = "asc",
        app_case: bool = True,
    ) -> PaginatedResponse[Record]:
        table = _require_table(table)
        parsed = self.parser.parse(query_params, default_direction=default_direction)
        pagination = parsed.pagination
        offset = (pagination.page - 1) * pagination.limit

        try:
            query = apply_filters(self.store.table(table).select(count="exact"), parsed.filters)
            if parsed.ordering is not None:
                query = query.order(parsed.ordering.column, ascending=parsed.ordering.ascending)
            result = query.range(offset, offset + pagination.limit - 1).execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to fetch records from {table}",
                ErrorCode.DB_QUERY_ERROR,
                {
                    "table": table,
                    "page": pagination.page,
                    "limit": pagination.limit,
                    "ordering": parsed.ordering.as_text if parsed.ordering else None,
                },
            )
            return create_paginated_error_response(error, pagination)

        rows = list(result.data or [])
        return create_paginated_response(
            self._present(rows, app_case), int(result.count or 0), pagination
        )

    def insert_record(
        self, table: str, data: Mapping[str, Any], *, app_case: bool = True
    ) -> ServiceResponse[Record]:
        table = _require_table(table)
        if not isinstance(data, Mapping):
            return create_error_response(
                self._validation_failure(f"Record for {table} must be an object", {"table": table})
            )
        try:
            result = self.store.table(table).insert(to_store_case(data)).single().execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to insert record into {table}",
                ErrorCode.DB_CONSTRAINT_VIOLATION,
                {"table": table},
            )
            return create_error_response(error)
        return create_success_response(self._present(result.data, app_case))

    def insert_batch(
        self, table: str, records: Sequence[Mapping[str, Any]], *, app_case: bool = True
    ) -> ServiceResponse[list[Record]]:
        table = _require_table(table)
        if not records:
            return create_success_response([])
        if not all(isinstance(record, Mapping) for record in records):
            return create_error_response(
                self._validation_failure(f"Every record for {table} must be an object", {"table": table})
            )
        try:
            result = (
                self.store.table(table)
                .insert([to_store_case(record) for record in records])
                .execute()
            )
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to insert records into {table}",
                ErrorCode.DB_CONSTRAINT_VIOLATION,
                {"table": table, "size": len(records)},
            )
            return create_error_response(error)
        return create_success_response(self._present(list(result.data or []), app_case))

    def update_record(
        self,
        table: str,
        record_id: Any,
        data: Mapping[str, Any],
        *,
        app_case: bool = True,
    ) -> ServiceResponse[Record]:
        table = _require_table(table)
        if not isinstance(data, Mapping) or not data:
            return create_error_response(
                self._validation_failure(
                    f"No fields to update in {table}", {"table": table, "id": record_id}
                )
            )
        try:
            result = (
                self.store.table(table)
                .update(to_store_case(data))
                .eq("id", record_id)
                .single()
                .execute()
            )
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to update record in {table}",
                ErrorCode.DB_CONSTRAINT_VIOLATION,
                {"table": table, "id": record_id},
            )
            return create_error_response(error)
        return create_success_response(self._present(result.data, app_case))

    def delete_record(self, table: str, record_id: Any) -> ServiceResponse[None]:
        table = _require_table(table)
        try:
            self.store.table(table).delete().eq("id", record_id).execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to delete record from {table}",
                ErrorCode.DB_QUERY_ERROR,
                {"table": table, "id": record_id},
            )
            return create_error_response(error)
        return create_success_response(None)

    def delete_where(self, table: str, column: str, value: Any) -> ServiceResponse[None]:
        """Delete every row of ``table`` whose ``column`` equals ``value``."""

        table = _require_table(table)
        if not isinstance(column, str) or not column:
            raise ValueError("A column name is required.")
        try:
            self.store.table(table).delete().eq(column, value).execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to delete records from {table}",
                ErrorCode.DB_QUERY_ERROR,
                {"table": table, "column": column},
            )
            return create_error_response(error)
        return create_success_response(None)

    def count(self, table: str, filters: Mapping[str, Any] | None = None) -> ServiceResponse[int]:
        """Count rows matching equality filters. Operator objects are not interpreted here."""

        table = _require_table(table)
        try:
            query = self.store.table(table).select(count="exact", head=True)
            for field, value in (filters or {}).items():
                if value is None:
                    continue
                query = query.eq(field, value)
            result = query.execute()
        except Exception as exc:
            error = self._wrap_failure(
                exc,
                f"Failed to count records in {table}",
                ErrorCode.DB_QUERY_ERROR,
                {"table": table},
            )
            return create_error_response(error)
        return create_success_response(int(result.count or 0))

    def raw_query(self, sql: str, params: Sequence[Any] = ()) -> ServiceResponse[list[Record]]:
        """Run ``sql`` through the store's ``execute_sql`` procedure. The SQL is not inspected."""

        try:
            result = self.store.rpc(EXECUTE_SQL_PROCEDURE, {"query": sql, "params": list(params)})
        except Exception as exc:
            error = self._wrap_failure(
                exc, "Failed to execute raw query", ErrorCode.DB_QUERY_ERROR, {}
            )
            return create_error_response(error)
        return create_success_response(list(result.data or []))

    @staticmethod
    def _present(data: Any, app_case: bool) -> Any:
        return to_app_case(data) if app_case else data

    def _validation_failure(self, message: str, context: Mapping[str, Any]) -> ServiceError:
        error = ServiceError(message, ErrorCode.VALIDATION_ERROR)
        self.log(logging.WARNING, message, {**context, "code": error.code.value})
        return error

    def _wrap_failure(
        self,
        exc: BaseException,
        message: str,
        default_code: ErrorCode,
        context: Mapping[str, Any],
    ) -> ServiceError:
        """Wrap ``exc`` into a ServiceError and log it exactly once."""

        if isinstance(exc, ServiceError):
            error = exc
        else:
            error = ServiceError(message, code_for_store_error(exc, default_code), cause=exc)
        level = logging.WARNING if is_expected(error.code) else logging.ERROR
        self.log(
            level,
            error.message,
            {**context, "code": error.code.value, "cause": repr(error.cause)},
        )
        return error


class TableResource:
    """CRUD view of :class:`ResourceService` bound to one table."""

    def __init__(self, resources: ResourceService, name: str) -> None:
        self.resources = resources
        self.name = _require_table(name)

    def fetch_by_id(self, record_id: Any) -> ServiceResponse[Record]:
        return self.resources.fetch_by_id(self.name, record_id)

    def fetch_records(
        self, query_params: Mapping[str, Any] | None = None, *, default_direction: str = "asc"
    ) -> PaginatedResponse[Record]:
        return self.resources.fetch_records(
            self.name, query_params, default_direction=default_direction
        )

    def insert_record(self, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.resources.insert_record(self.name, data)

    def insert_batch(self, records: Sequence[Mapping[str, Any]]) -> ServiceResponse[list[Record]]:
        return self.resources.insert_batch(self.name, records)

    def update_record(self, record_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.resources.update_record(self.name, record_id, data)

    def delete_record(self, record_id: Any) -> ServiceResponse[None]:
        return self.resources.delete_record(self.name, record_id)

    def delete_where(self, column: str, value: Any) -> ServiceResponse[None]:
        return self.resources.delete_where(self.name, column, value)

    def count(self, filters: Mapping[str, Any] | None = None) -> ServiceResponse[int]:
        return self.resources.count(self.name, filters)
