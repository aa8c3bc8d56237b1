# This file builds the response envelopes returned by every resource-layer operation.
# It exists so callers always receive the same status, data, error, and timestamp fields.
# Paginated envelopes add page metadata computed in exactly one place to avoid drift between callers.
# The constructors are pure: they never touch the store and never raise.

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, Literal, TypeVar

from fairway.resources.errors import ServiceError
from fairway.resources.query_parser import PaginationSpec

T = TypeVar("T")

Status = Literal["success", "error"]


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""

    return datetime.now(tz=UTC).isoformat()


@dataclass(frozen=True)
class PaginationMetadata:
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasMore": self.has_more,
        }


@dataclass(frozen=True)
class ServiceResponse(Generic[T]):
    status: Status
    data: T | None
    error: ServiceError | None
    timestamp: str

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "data": self.data,
            "error": self.error.to_dict() if self.error is not None else None,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PaginatedResponse(ServiceResponse[list[T]]):
    metadata: PaginationMetadata

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["metadata"] = self.metadata.to_dict()
        return payload


def compute_total_pages(*, total: int, limit: int) -> int:
    """Compute ``ceil(total / limit)`` without floating point."""

    if total <= 0:
        return 0
    return ((total - 1) // limit) + 1


def create_success_response(data: T) -> ServiceResponse[T]:
    return ServiceResponse(status="success", data=data, error=None, timestamp=utc_now_iso())


def create_error_response(error: ServiceError) -> ServiceResponse[Any]:
    return ServiceResponse(status="error", data=None, error=error, timestamp=utc_now_iso())


def create_paginated_response(
    data: list[T], total: int, pagination: PaginationSpec
) -> PaginatedResponse[T]:
    """Wrap one page of rows and derive ``totalPages`` and ``hasMore`` from ``total``."""

    total_pages = compute_total_pages(total=total, limit=pagination.limit)
    return PaginatedResponse(
        status="success",
        data=data,
        error=None,
        timestamp=utc_now_iso(),
        metadata=PaginationMetadata(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            total_pages=total_pages,
            has_more=pagination.page < total_pages,
        ),
    )


def create_paginated_error_response(
    error: ServiceError, pagination: PaginationSpec
) -> PaginatedResponse[Any]:
    """Error envelope with zeroed metadata, so list screens can render an empty state."""

    return PaginatedResponse(
        status="error",
        data=None,
        error=error,
        timestamp=utc_now_iso(),
        metadata=PaginationMetadata(
            page=pagination.page,
            limit=pagination.limit,
            total=0,
            total_pages=0,
            has_more=False,
        ),
    )
