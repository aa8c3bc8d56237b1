# This file runs read-only service calls with the configured retry policy.
# Writes are never retried here; a repeated insert could create a duplicate row.

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import Request

from fairway.api.api_config import ApiConfig
from fairway.api.query_string import decode_query_params
from fairway.resources.base_service import BaseService
from fairway.resources.response_envelope import ServiceResponse

R = TypeVar("R", bound=ServiceResponse[Any])


def read_with_retry(service: BaseService, config: ApiConfig, operation: Callable[[], R]) -> R:
    return service.with_retry(
        operation,
        retries=config.read_retry_attempts,
        backoff_ms=config.read_retry_backoff_ms,
    )


def list_params(request: Request, config: ApiConfig) -> dict[str, Any]:
    """Decode the request's query string using the configured page sizes."""

    return decode_query_params(
        request.query_params.multi_items(),
        default_limit=config.default_page_size,
        max_limit=config.max_page_size,
    )
