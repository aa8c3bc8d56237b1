# This file defines runtime settings for the HTTP layer in one place.
# It exists so versioning, page sizes, read retries, CORS and table names can be changed without code edits.
# The loader reads API_* environment variables and applies defaults suited to local development.
# Table names are validated as plain SQL identifiers before any service sees them.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

TABLE_NAME_FIELDS = (
    "courses_table_name",
    "course_tees_table_name",
    "series_table_name",
    "series_participants_table_name",
    "events_table_name",
    "event_participants_table_name",
    "rounds_table_name",
    "scores_table_name",
    "profiles_table_name",
)


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Fairway Competition API"
    api_version_path: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    default_page_size: int = 10
    max_page_size: int = 100
    read_retry_attempts: int = 2
    read_retry_backoff_ms: int = 200
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    courses_table_name: str = "courses"
    course_tees_table_name: str = "course_tees"
    series_table_name: str = "series"
    series_participants_table_name: str = "series_participants"
    events_table_name: str = "events"
    event_participants_table_name: str = "event_participants"
    rounds_table_name: str = "rounds"
    scores_table_name: str = "scores"
    profiles_table_name: str = "profiles"
    app_version: str = "0.1.0"

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator(*TABLE_NAME_FIELDS)
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("read_retry_attempts", "read_retry_backoff_ms")
    @classmethod
    def validate_non_negative_ints(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Value must be 0 or greater.")
        return value

    @model_validator(mode="after")
    def validate_page_sizes(self) -> ApiConfig:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size.")
        return self

    def api_version_label(self) -> str:
        return self.api_version_path.rstrip("/").split("/")[-1]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def _table_env_name(field_name: str) -> str:
    # courses_table_name -> API_COURSES_TABLE
    return "API_" + field_name.removesuffix("_name").upper()


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Fairway Competition API"),
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "default_page_size": _env_int("API_DEFAULT_PAGE_SIZE", 10),
        "max_page_size": _env_int("API_MAX_PAGE_SIZE", 100),
        "read_retry_attempts": _env_int("API_READ_RETRY_ATTEMPTS", 2),
        "read_retry_backoff_ms": _env_int("API_READ_RETRY_BACKOFF_MS", 200),
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", False),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    for field_name in TABLE_NAME_FIELDS:
        override = os.getenv(_table_env_name(field_name))
        if override:
            config_values[field_name] = override.strip()

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
