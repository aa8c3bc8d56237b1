# This file defines course and course tee endpoints under the versioned API path.
# Reads go through the configured retry policy; writes run once.
# Error envelopes from the service are raised as APIError and rendered by the global handlers.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from fairway.api.dependencies import ConfigDep, get_course_service
from fairway.api.reads import list_params, read_with_retry
from fairway.api.response_envelope import build_success_body
from fairway.api.schemas.common import ERROR_RESPONSES
from fairway.api.schemas.course_schemas import (
    CourseCreate,
    CourseTeeCreate,
    CourseTeeUpdate,
    CourseUpdate,
)
from fairway.services.course_service import CourseService

router = APIRouter(prefix="/courses", tags=["courses"], responses=ERROR_RESPONSES)
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]


@router.get("")
def list_courses(request: Request, service: CourseServiceDep, config: ConfigDep) -> dict[str, Any]:
    params = list_params(request, config)
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.list_courses(params))
    )


@router.post("", status_code=201)
def create_course(body: CourseCreate, service: CourseServiceDep) -> dict[str, Any]:
    return build_success_body(service.create_course(body.to_payload()))


@router.patch("/tees/{tee_id}")
def update_course_tee(
    tee_id: str, body: CourseTeeUpdate, service: CourseServiceDep
) -> dict[str, Any]:
    return build_success_body(service.update_course_tee(tee_id, body.to_payload()))


@router.delete("/tees/{tee_id}")
def remove_course_tee(tee_id: str, service: CourseServiceDep) -> dict[str, Any]:
    return build_success_body(service.remove_course_tee(tee_id))


@router.get("/{course_id}")
def get_course(
    course_id: str,
    service: CourseServiceDep,
    config: ConfigDep,
    include_tees: bool = Query(default=False, alias="includeTees"),
) -> dict[str, Any]:
    fetch = service.get_course_with_tees if include_tees else service.get_course
    return build_success_body(read_with_retry(service.resources, config, lambda: fetch(course_id)))


@router.patch("/{course_id}")
def update_course(course_id: str, body: CourseUpdate, service: CourseServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_course(course_id, body.to_payload()))


@router.delete("/{course_id}")
def delete_course(course_id: str, service: CourseServiceDep) -> dict[str, Any]:
    return build_success_body(service.delete_course(course_id))


@router.post("/{course_id}/tees", status_code=201)
def add_course_tee(
    course_id: str, body: CourseTeeCreate, service: CourseServiceDep
) -> dict[str, Any]:
    return build_success_body(service.add_course_tee(course_id, body.to_payload()))
