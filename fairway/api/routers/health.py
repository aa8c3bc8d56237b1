# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# Readiness only checks that the database answers; table presence is the migrations' concern.

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from fairway.api.dependencies import ConfigDep, StoreDep
from fairway.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse

router = APIRouter(tags=["health"])


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, config: ConfigDep, store: StoreDep) -> dict[str, object]:
    db_connected = store.can_connect()
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "ready": db_connected,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
