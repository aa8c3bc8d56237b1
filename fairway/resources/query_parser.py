# This file parses generic query parameters into pagination, ordering, and filter specs.
# It exists so every list operation shares the same defaults and the same small filter-operator language.
# Parsing is lenient on purpose: malformed values fall back to defaults and unknown operators are dropped.
# The offset is not part of the result; callers derive it once from page and limit.

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

logger = logging.getLogger(__name__)

FILTER_OPERATORS: Final[frozenset[str]] = frozenset(
    {"eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike", "in", "contains"}
)
SORT_DIRECTIONS: Final[frozenset[str]] = frozenset({"asc", "desc"})
DEFAULT_PAGE: Final[int] = 1
DEFAULT_LIMIT: Final[int] = 10


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int


@dataclass(frozen=True)
class OrderingSpec:
    column: str
    direction: str

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"

    @property
    def as_text(self) -> str:
        return f"{self.column}:{self.direction}"


@dataclass(frozen=True)
class FilterSpec:
    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class ParsedQuery:
    pagination: PaginationSpec
    ordering: OrderingSpec | None
    filters: tuple[FilterSpec, ...]


def _coerce_positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(number, 1)


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


class QueryParser:
    """Turn a raw query-parameters mapping into a :class:`ParsedQuery`.

    The raw shape is ``{"pagination": {"page", "limit"}, "ordering":
    {"column", "direction"}, "filters": {field: value}}``; every section is
    optional. A filter value is either a scalar (equality) or a mapping with
    exactly one operator key, e.g. ``{"gte": 72}``.
    """

    def __init__(self, *, default_limit: int = DEFAULT_LIMIT, max_limit: int | None = None) -> None:
        if default_limit < 1:
            raise ValueError("default_limit must be >= 1")
        if max_limit is not None and max_limit < default_limit:
            raise ValueError("max_limit must be >= default_limit")
        self.default_limit = default_limit
        self.max_limit = max_limit

    def parse(
        self,
        raw: Mapping[str, Any] | None = None,
        *,
        default_direction: str = "asc",
    ) -> ParsedQuery:
        source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        return ParsedQuery(
            pagination=self.parse_pagination(_section(source, "pagination")),
            ordering=self.parse_ordering(
                _section(source, "ordering"), default_direction=default_direction
            ),
            filters=self.parse_filters(_section(source, "filters")),
        )

    def parse_pagination(self, raw: Mapping[str, Any]) -> PaginationSpec:
        page = _coerce_positive_int(raw.get("page"), DEFAULT_PAGE)
        limit = _coerce_positive_int(raw.get("limit"), self.default_limit)
        if self.max_limit is not None:
            limit = min(limit, self.max_limit)
        return PaginationSpec(page=page, limit=limit)

    @staticmethod
    def parse_ordering(
        raw: Mapping[str, Any], *, default_direction: str = "asc"
    ) -> OrderingSpec | None:
        column = raw.get("column")
        if not isinstance(column, str) or not column.strip():
            return None

        fallback = default_direction if default_direction in SORT_DIRECTIONS else "asc"
        direction = raw.get("direction")
        if isinstance(direction, str) and direction.strip().lower() in SORT_DIRECTIONS:
            resolved = direction.strip().lower()
        else:
            resolved = fallback
        return OrderingSpec(column=column, direction=resolved)

    @staticmethod
    def parse_filters(raw: Mapping[str, Any]) -> tuple[FilterSpec, ...]:
        specs: list[FilterSpec] = []
        for field, value in raw.items():
            if value is None:
                continue
            if isinstance(value, Mapping):
                if len(value) == 1:
                    operator, operand = next(iter(value.items()))
                    if operator in FILTER_OPERATORS:
                        specs.append(FilterSpec(field=str(field), operator=operator, value=operand))
                        continue
                logger.debug("Ignoring filter on %s with unsupported operator object %r", field, value)
                continue
            specs.append(FilterSpec(field=str(field), operator="eq", value=value))
        return tuple(specs)


_DEFAULT_PARSER = QueryParser()


def parse_query_params(
    raw: Mapping[str, Any] | None = None, *, default_direction: str = "asc"
) -> ParsedQuery:
    """Parse with the default parser (limit 10, no maximum)."""

    return _DEFAULT_PARSER.parse(raw, default_direction=default_direction)
