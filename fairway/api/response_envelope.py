# This file renders service envelopes as HTTP response bodies.
# It exists so every route returns the same success shape and converts error envelopes the same way.
# Error envelopes are raised as APIError and rendered by the registered exception handlers.

from __future__ import annotations

from typing import Any

from fairway.api.error_handlers import raise_for_error
from fairway.resources.response_envelope import PaginatedResponse, ServiceResponse


def build_success_body(response: ServiceResponse[Any]) -> dict[str, Any]:
    """Return the success body for ``response`` or raise if it carries an error."""

    raise_for_error(response)
    body: dict[str, Any] = {
        "status": "success",
        "data": response.data,
        "timestamp": response.timestamp,
    }
    if isinstance(response, PaginatedResponse):
        body["metadata"] = response.metadata.to_dict()
    return body
