# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so envelope metadata and error payloads are described once in the OpenAPI document.
# BodyModel is the base for request bodies: camelCase aliases, snake_case attributes, unknown keys rejected.

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BodyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """Only the fields the client sent, keyed by their camelCase names."""

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class PaginationMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0, alias="totalPages")
    has_more: bool = Field(alias="hasMore")


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ErrorResponse(BaseModel):
    status: str = "error"
    error: ErrorDetail
    request_id: str
    timestamp: str


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
