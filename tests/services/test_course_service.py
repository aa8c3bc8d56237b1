"""
Unit tests for course and tee operations.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import pytest

from fairway.resources.errors import ErrorCode
from fairway.resources.resource_service import ResourceService
from fairway.resources.store import StoreConnectionError, StoreResult
from fairway.services.course_service import CourseService
from tests.fakes import ScriptedStore


@pytest.fixture
def courses(resources: ResourceService) -> CourseService:
    return CourseService(resources)


def test_course_with_tees(courses: CourseService) -> None:
    course = courses.create_course({"name": "Old Course", "par": 72})
    course_id = course.data["id"]
    courses.add_course_tee(course_id, {"teeName": "White", "gender": "Male", "par": 72})
    courses.add_course_tee(course_id, {"teeName": "Blue", "gender": "Unisex", "par": 72})

    response = courses.get_course_with_tees(course_id)

    assert response.ok
    assert response.data["name"] == "Old Course"
    assert [tee["teeName"] for tee in response.data["tees"]] == ["Blue", "White"]
    assert all(tee["courseId"] == course_id for tee in response.data["tees"])


def test_course_with_tees_for_missing_course(courses: CourseService) -> None:
    assert courses.get_course_with_tees(999).error.code is ErrorCode.DB_NOT_FOUND


def test_tee_gender_is_validated(courses: CourseService) -> None:
    course_id = courses.create_course({"name": "Old Course"}).data["id"]

    added = courses.add_course_tee(course_id, {"teeName": "Red", "gender": "Junior"})
    updated = courses.update_course_tee(1, {"gender": "Any"})

    assert added.error.code is ErrorCode.VALIDATION_ERROR
    assert updated.error.code is ErrorCode.VALIDATION_ERROR
    assert courses.tees.count().data == 0


def test_course_name_is_required(courses: CourseService) -> None:
    assert courses.create_course({"par": 72}).error.code is ErrorCode.VALIDATION_ERROR


def test_delete_course_removes_its_tees(courses: CourseService) -> None:
    keep = courses.create_course({"name": "Keep"}).data["id"]
    drop = courses.create_course({"name": "Drop"}).data["id"]
    courses.add_course_tee(keep, {"teeName": "White", "gender": "Male"})
    courses.add_course_tee(drop, {"teeName": "White", "gender": "Male"})
    courses.add_course_tee(drop, {"teeName": "Red", "gender": "Female"})

    assert courses.delete_course(drop).ok

    assert courses.get_course(drop).error.code is ErrorCode.DB_NOT_FOUND
    assert courses.tees.count({"course_id": drop}).data == 0
    assert courses.tees.count({"course_id": keep}).data == 1


def test_delete_course_stops_when_tee_cleanup_fails() -> None:
    store = ScriptedStore(StoreConnectionError("down"), StoreResult(data=None))
    courses = CourseService(ResourceService(store))

    response = courses.delete_course(5)

    assert response.error.code is ErrorCode.DB_QUERY_ERROR
    assert [query.table for query in store.executed] == ["course_tees"]


def test_list_courses_orders_by_name(courses: CourseService) -> None:
    for name in ("Muirfield", "Ballybunion", "Royal Troon"):
        courses.create_course({"name": name})

    default = courses.list_courses({})
    reversed_ = courses.list_courses({"ordering": {"column": "name", "direction": "desc"}})

    assert [row["name"] for row in default.data] == ["Ballybunion", "Muirfield", "Royal Troon"]
    assert [row["name"] for row in reversed_.data] == ["Royal Troon", "Muirfield", "Ballybunion"]


def test_update_and_remove_tee(courses: CourseService) -> None:
    course_id = courses.create_course({"name": "Old Course"}).data["id"]
    tee_id = courses.add_course_tee(course_id, {"teeName": "White", "gender": "Male"}).data["id"]

    updated = courses.update_course_tee(tee_id, {"slopeRating": 131})
    removed = courses.remove_course_tee(tee_id)

    assert updated.data["slopeRating"] == 131
    assert removed.ok
    assert courses.tees.count().data == 0
