# This file defines the HTTP error payload and the exception handlers registered on the app.
# It exists so every endpoint answers failures with the same envelope and a request id to trace them by.
# Service error codes are mapped to status codes here and nowhere else.
# Unexpected exceptions become a generic 500 body; stack traces stay in the logs.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fairway.resources.errors import ErrorCode
from fairway.resources.response_envelope import ServiceResponse, utc_now_iso

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.DB_NOT_FOUND: 404,
    ErrorCode.DB_CONSTRAINT_VIOLATION: 409,
    ErrorCode.DB_QUERY_ERROR: 500,
    ErrorCode.AUTH_INVALID_CREDENTIALS: 401,
    ErrorCode.AUTH_USER_NOT_FOUND: 404,
    ErrorCode.AUTH_SESSION_EXPIRED: 401,
    ErrorCode.AUTH_EMAIL_IN_USE: 409,
    ErrorCode.AUTH_WEAK_PASSWORD: 400,
}


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


def status_for_code(code: ErrorCode | str) -> int:
    try:
        return ERROR_STATUS[ErrorCode(code)]
    except ValueError:
        return 500


def raise_for_error(response: ServiceResponse[Any]) -> None:
    """Raise :class:`APIError` when ``response`` is an error envelope."""

    if response.error is None:
        return
    error = response.error
    raise APIError(
        status_code=status_for_code(error.code),
        error_code=error.code.value,
        message=error.message,
    )


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "status": "error",
        "error": {"code": error_code, "message": message, "details": details},
        "request_id": _request_id(request),
        "timestamp": utc_now_iso(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code=exc.error_code,
                message=exc.message,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request=request,
                error_code=ErrorCode.VALIDATION_ERROR.value,
                message="Invalid request parameters.",
                details=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error request_id=%s", _request_id(request), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
