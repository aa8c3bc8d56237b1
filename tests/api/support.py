# This file provides shared helpers for API endpoint tests.
# It exists so tests can swap the store and config dependencies without a real database server.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from fairway.api.api_config import ApiConfig
from fairway.api.app import app
from fairway.api.dependencies import get_config, get_store


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Fairway API",
        "api_version_path": "/api/v1",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "default_page_size": 2,
        "max_page_size": 5,
        "read_retry_attempts": 0,
        "read_retry_backoff_ms": 0,
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    store: Any | None = None,
    overrides: dict[Callable[..., Any], Callable[..., Any]] | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if store is not None:
        app.dependency_overrides[get_store] = lambda: store
    for dependency, replacement in (overrides or {}).items():
        app.dependency_overrides[dependency] = replacement

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
