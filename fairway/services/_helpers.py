"""Small helpers shared by the feature services."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fairway.resources.errors import ErrorCode, ServiceError
from fairway.resources.resource_service import ResourceService
from fairway.resources.response_envelope import ServiceResponse, create_error_response

CHILD_ROWS_LIMIT = 500


def reject(
    resources: ResourceService, message: str, context: Mapping[str, Any] | None = None
) -> ServiceResponse[Any]:
    """Return a validation error envelope without touching the store."""

    error = ServiceError(message, ErrorCode.VALIDATION_ERROR)
    resources.log(logging.WARNING, message, {**(context or {}), "code": error.code.value})
    return create_error_response(error)


def child_query(foreign_key: str, value: Any, *, order_by: str | None = None) -> dict[str, Any]:
    """Query params selecting every child row that points at one parent."""

    params: dict[str, Any] = {
        "pagination": {"page": 1, "limit": CHILD_ROWS_LIMIT},
        "filters": {foreign_key: value},
    }
    if order_by is not None:
        params["ordering"] = {"column": order_by, "direction": "asc"}
    return params


def missing_fields(data: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    return [field for field in required if data.get(field) in (None, "")]
