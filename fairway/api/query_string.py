# This file decodes list-endpoint query strings into the mapping the query parser understands.
# It exists so routes accept `limit`, `page`, `sortBy`, `sortDir` and `field[op]=value` filters uniformly.
# Field names and sortBy arrive in camelCase and are converted to store column names here.
# Operator validity is not checked here; the parser drops anything it does not recognise.

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from fairway.resources.key_case import to_snake_case

RESERVED_PARAMS = frozenset({"limit", "page", "sortBy", "sortDir"})

_OPERATOR_KEY_RE = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)\[(?P<operator>[A-Za-z_]+)\]$")

# Keeps offset = (page - 1) * limit inside a 64-bit integer for any configured page size.
MAX_PAGE = 1_000_000


def _clamped_limit(raw: str | None, *, default_limit: int, max_limit: int) -> Any:
    if raw is None or raw.strip() == "":
        return default_limit
    try:
        return min(int(raw), max_limit)
    except ValueError:
        # Left for the parser, which falls back to its default.
        return raw


def _clamped_page(raw: str | None) -> Any:
    if raw is None or raw.strip() == "":
        return None
    try:
        return min(int(raw), MAX_PAGE)
    except ValueError:
        return raw


def decode_query_params(
    items: Iterable[tuple[str, str]],
    *,
    default_limit: int,
    max_limit: int,
) -> dict[str, Any]:
    """Build ``{"pagination", "ordering", "filters"}`` from query-string pairs.

    Repeated keys keep their last value. ``in`` values are split on commas.
    """

    pairs = dict(items)
    filters: dict[str, Any] = {}
    for key, value in pairs.items():
        if key in RESERVED_PARAMS:
            continue
        match = _OPERATOR_KEY_RE.match(key)
        if match is None:
            filters[to_snake_case(key)] = value
            continue
        operator = match.group("operator")
        operand: Any = value
        if operator == "in":
            operand = [item.strip() for item in value.split(",") if item.strip()]
        filters[to_snake_case(match.group("field"))] = {operator: operand}

    params: dict[str, Any] = {
        "pagination": {
            "page": _clamped_page(pairs.get("page")),
            "limit": _clamped_limit(
                pairs.get("limit"), default_limit=default_limit, max_limit=max_limit
            ),
        },
        "filters": filters,
    }
    sort_by = pairs.get("sortBy")
    if sort_by:
        params["ordering"] = {"column": to_snake_case(sort_by), "direction": pairs.get("sortDir")}
    return params
