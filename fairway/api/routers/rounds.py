# This file defines round and hole score endpoints under the versioned API path.
# Reads go through the configured retry policy; writes run once.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from fairway.api.dependencies import ConfigDep, get_round_service
from fairway.api.reads import list_params, read_with_retry
from fairway.api.response_envelope import build_success_body
from fairway.api.schemas.common import ERROR_RESPONSES
from fairway.api.schemas.round_schemas import RoundCreate, RoundUpdate, ScoreCreate, ScoreUpdate
from fairway.services.round_service import RoundService

router = APIRouter(prefix="/rounds", tags=["rounds"], responses=ERROR_RESPONSES)
RoundServiceDep = Annotated[RoundService, Depends(get_round_service)]


@router.get("")
def list_rounds(request: Request, service: RoundServiceDep, config: ConfigDep) -> dict[str, Any]:
    params = list_params(request, config)
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.list_rounds(params))
    )


@router.post("", status_code=201)
def create_round(body: RoundCreate, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.create_round(body.to_payload()))


@router.patch("/scores/{score_id}")
def update_score(score_id: str, body: ScoreUpdate, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_score(score_id, body.to_payload()))


@router.delete("/scores/{score_id}")
def remove_score(score_id: str, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.remove_score(score_id))


@router.get("/{round_id}")
def get_round(
    round_id: str,
    service: RoundServiceDep,
    config: ConfigDep,
    include_scores: bool = Query(default=False, alias="includeScores"),
) -> dict[str, Any]:
    fetch = service.get_round_with_scores if include_scores else service.get_round
    return build_success_body(read_with_retry(service.resources, config, lambda: fetch(round_id)))


@router.patch("/{round_id}")
def update_round(round_id: str, body: RoundUpdate, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_round(round_id, body.to_payload()))


@router.delete("/{round_id}")
def delete_round(round_id: str, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.delete_round(round_id))


@router.post("/{round_id}/scores", status_code=201)
def add_score(round_id: str, body: ScoreCreate, service: RoundServiceDep) -> dict[str, Any]:
    return build_success_body(service.add_score(round_id, body.to_payload()))
