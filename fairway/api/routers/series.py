# This file defines series and series participant endpoints under the versioned API path.
# Reads go through the configured retry policy; writes run once.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from fairway.api.dependencies import ConfigDep, get_series_service
from fairway.api.reads import list_params, read_with_retry
from fairway.api.response_envelope import build_success_body
from fairway.api.schemas.common import ERROR_RESPONSES
from fairway.api.schemas.series_schemas import (
    SeriesCreate,
    SeriesParticipantCreate,
    SeriesParticipantUpdate,
    SeriesUpdate,
)
from fairway.services.series_service import SeriesService

router = APIRouter(prefix="/series", tags=["series"], responses=ERROR_RESPONSES)
SeriesServiceDep = Annotated[SeriesService, Depends(get_series_service)]


@router.get("")
def list_series(request: Request, service: SeriesServiceDep, config: ConfigDep) -> dict[str, Any]:
    params = list_params(request, config)
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.list_series(params))
    )


@router.post("", status_code=201)
def create_series(body: SeriesCreate, service: SeriesServiceDep) -> dict[str, Any]:
    return build_success_body(service.create_series(body.to_payload()))


@router.get("/users/{user_id}/participations")
def list_user_series_participations(
    user_id: str, service: SeriesServiceDep, config: ConfigDep
) -> dict[str, Any]:
    return build_success_body(
        read_with_retry(
            service.resources, config, lambda: service.list_user_series_participations(user_id)
        )
    )


@router.patch("/participants/{participant_id}")
def update_series_participant(
    participant_id: str, body: SeriesParticipantUpdate, service: SeriesServiceDep
) -> dict[str, Any]:
    return build_success_body(service.update_series_participant(participant_id, body.to_payload()))


@router.delete("/participants/{participant_id}")
def remove_series_participant(participant_id: str, service: SeriesServiceDep) -> dict[str, Any]:
    return build_success_body(service.remove_series_participant(participant_id))


@router.get("/{series_id}")
def get_series(
    series_id: str,
    service: SeriesServiceDep,
    config: ConfigDep,
    include_participants: bool = Query(default=False, alias="includeParticipants"),
) -> dict[str, Any]:
    fetch = service.get_series_with_participants if include_participants else service.get_series
    return build_success_body(read_with_retry(service.resources, config, lambda: fetch(series_id)))


@router.patch("/{series_id}")
def update_series(series_id: str, body: SeriesUpdate, service: SeriesServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_series(series_id, body.to_payload()))


@router.delete("/{series_id}")
def delete_series(series_id: str, service: SeriesServiceDep) -> dict[str, Any]:
    return build_success_body(service.delete_series(series_id))


@router.post("/{series_id}/participants", status_code=201)
def add_series_participant(
    series_id: str, body: SeriesParticipantCreate, service: SeriesServiceDep
) -> dict[str, Any]:
    return build_success_body(service.add_series_participant(series_id, body.to_payload()))
