# This file implements course and course tee operations on top of the generic resource service.
# It exists so routes ask for golf concepts (a course with its tees) rather than composing table calls.
# Deleting a course removes its tees first; the two deletes are separate statements, not one transaction.
# Every method returns an envelope; nothing here raises on store failures.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fairway.resources.key_case import to_app_case
from fairway.resources.resource_service import Record, ResourceService
from fairway.resources.response_envelope import (
    PaginatedResponse,
    ServiceResponse,
    create_error_response,
    create_success_response,
)
from fairway.services._helpers import child_query, missing_fields, reject

TEE_GENDERS = ("Male", "Female", "Unisex")


class CourseService:
    """Courses and the tees that belong to them."""

    def __init__(
        self,
        resources: ResourceService,
        *,
        courses_table: str = "courses",
        tees_table: str = "course_tees",
    ) -> None:
        self.resources = resources
        self.courses = resources.table(courses_table)
        self.tees = resources.table(tees_table)

    def create_course(self, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if missing_fields(payload, ("name",)):
            return reject(self.resources, "Course name is required", {"table": self.courses.name})
        return self.courses.insert_record(payload)

    def get_course(self, course_id: Any) -> ServiceResponse[Record]:
        return self.courses.fetch_by_id(course_id)

    def update_course(self, course_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.courses.update_record(course_id, data)

    def delete_course(self, course_id: Any) -> ServiceResponse[None]:
        removed = self.tees.delete_where("course_id", course_id)
        if not removed.ok:
            return removed
        return self.courses.delete_record(course_id)

    def list_courses(self, query_params: Mapping[str, Any] | None = None) -> PaginatedResponse[Record]:
        params = dict(query_params or {})
        params.setdefault("ordering", {"column": "name", "direction": "asc"})
        return self.courses.fetch_records(params)

    def add_course_tee(self, course_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        missing = missing_fields(payload, ("teeName", "gender"))
        if missing:
            return reject(
                self.resources,
                f"Missing course tee fields: {', '.join(missing)}",
                {"course_id": course_id},
            )
        if payload["gender"] not in TEE_GENDERS:
            return reject(
                self.resources,
                f"Tee gender must be one of: {', '.join(TEE_GENDERS)}",
                {"course_id": course_id, "gender": payload["gender"]},
            )
        payload["courseId"] = course_id
        return self.tees.insert_record(payload)

    def update_course_tee(self, tee_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if "gender" in payload and payload["gender"] not in TEE_GENDERS:
            return reject(
                self.resources,
                f"Tee gender must be one of: {', '.join(TEE_GENDERS)}",
                {"tee_id": tee_id, "gender": payload["gender"]},
            )
        return self.tees.update_record(tee_id, payload)

    def remove_course_tee(self, tee_id: Any) -> ServiceResponse[None]:
        return self.tees.delete_record(tee_id)

    def get_course_with_tees(self, course_id: Any) -> ServiceResponse[Record]:
        course = self.courses.fetch_by_id(course_id)
        if not course.ok:
            return course
        tees = self.tees.fetch_records(child_query("course_id", course_id, order_by="tee_name"))
        if not tees.ok:
            return create_error_response(tees.error)
        return create_success_response({**course.data, "tees": tees.data})
