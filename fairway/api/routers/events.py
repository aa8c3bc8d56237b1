# This file defines event and event participant endpoints under the versioned API path.
# Reads go through the configured retry policy; writes run once.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from fairway.api.dependencies import ConfigDep, get_event_service
from fairway.api.reads import list_params, read_with_retry
from fairway.api.response_envelope import build_success_body
from fairway.api.schemas.common import ERROR_RESPONSES
from fairway.api.schemas.event_schemas import (
    EventCreate,
    EventParticipantCreate,
    EventParticipantUpdate,
    EventUpdate,
)
from fairway.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"], responses=ERROR_RESPONSES)
EventServiceDep = Annotated[EventService, Depends(get_event_service)]


@router.get("")
def list_events(request: Request, service: EventServiceDep, config: ConfigDep) -> dict[str, Any]:
    params = list_params(request, config)
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.list_events(params))
    )


@router.post("", status_code=201)
def create_event(body: EventCreate, service: EventServiceDep) -> dict[str, Any]:
    return build_success_body(service.create_event(body.to_payload()))


@router.get("/users/{user_id}/participations")
def list_user_event_participations(
    user_id: str, service: EventServiceDep, config: ConfigDep
) -> dict[str, Any]:
    return build_success_body(
        read_with_retry(
            service.resources, config, lambda: service.list_user_event_participations(user_id)
        )
    )


@router.patch("/participants/{participant_id}")
def update_event_participant(
    participant_id: str, body: EventParticipantUpdate, service: EventServiceDep
) -> dict[str, Any]:
    return build_success_body(service.update_event_participant(participant_id, body.to_payload()))


@router.delete("/participants/{participant_id}")
def remove_event_participant(participant_id: str, service: EventServiceDep) -> dict[str, Any]:
    return build_success_body(service.remove_event_participant(participant_id))


@router.get("/{event_id}")
def get_event(
    event_id: str,
    service: EventServiceDep,
    config: ConfigDep,
    include_participants: bool = Query(default=False, alias="includeParticipants"),
) -> dict[str, Any]:
    fetch = service.get_event_with_participants if include_participants else service.get_event
    return build_success_body(read_with_retry(service.resources, config, lambda: fetch(event_id)))


@router.patch("/{event_id}")
def update_event(event_id: str, body: EventUpdate, service: EventServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_event(event_id, body.to_payload()))


@router.delete("/{event_id}")
def delete_event(event_id: str, service: EventServiceDep) -> dict[str, Any]:
    return build_success_body(service.delete_event(event_id))


@router.post("/{event_id}/participants", status_code=201)
def add_event_participant(
    event_id: str, body: EventParticipantCreate, service: EventServiceDep
) -> dict[str, Any]:
    return build_success_body(service.add_event_participant(event_id, body.to_payload()))
