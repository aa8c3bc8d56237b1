# This file defines the closed error taxonomy shared by every service in the resource layer.
# It exists so failures carry a stable machine code that route handlers can map to HTTP statuses.
# ServiceError keeps the original cause for diagnostics while exposing only a sanitized message.
# The classification helpers decide which failures are expected and which are worth retrying.

from __future__ import annotations

from enum import StrEnum

from fairway.resources.store import (
    StoreConnectionError,
    StoreConstraintError,
    StoreError,
    StoreNoRowsError,
    StoreQueryError,
)


class ErrorCode(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DB_NOT_FOUND = "DB_NOT_FOUND"
    DB_CONSTRAINT_VIOLATION = "DB_CONSTRAINT_VIOLATION"
    DB_QUERY_ERROR = "DB_QUERY_ERROR"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_USER_NOT_FOUND = "AUTH_USER_NOT_FOUND"
    AUTH_SESSION_EXPIRED = "AUTH_SESSION_EXPIRED"
    AUTH_EMAIL_IN_USE = "AUTH_EMAIL_IN_USE"
    AUTH_WEAK_PASSWORD = "AUTH_WEAK_PASSWORD"


EXPECTED_CODES: frozenset[ErrorCode] = frozenset(
    {
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.DB_NOT_FOUND,
        ErrorCode.AUTH_USER_NOT_FOUND,
    }
)

TRANSIENT_CODES: frozenset[ErrorCode] = frozenset({ErrorCode.DB_QUERY_ERROR})


class ServiceError(Exception):
    """Failure returned inside an error envelope.

    ``message`` is safe to show to callers. ``cause`` holds the original
    exception for logs and is never serialized.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.cause = cause

    def __repr__(self) -> str:
        return f"ServiceError(code={self.code.value!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


def is_expected(code: ErrorCode) -> bool:
    """Return True for outcomes callers are expected to handle, such as not-found."""

    return code in EXPECTED_CODES


def code_for_store_error(exc: BaseException, default: ErrorCode) -> ErrorCode:
    """Pick the taxonomy code for a store failure, falling back to the call-site default."""

    if isinstance(exc, StoreNoRowsError):
        return ErrorCode.DB_NOT_FOUND
    if isinstance(exc, StoreConstraintError):
        return ErrorCode.DB_CONSTRAINT_VIOLATION
    if isinstance(exc, StoreConnectionError | StoreQueryError):
        return ErrorCode.DB_QUERY_ERROR
    return default


def is_transient(exc: BaseException) -> bool:
    """Return True when a failure may succeed if the same call is repeated."""

    if isinstance(exc, ServiceError):
        return exc.code in TRANSIENT_CODES
    if isinstance(exc, StoreError):
        return isinstance(exc, StoreConnectionError | StoreQueryError)
    return isinstance(exc, ConnectionError | TimeoutError)
