"""
Unit tests for the generic resource service.
Happy paths run against in-memory SQLite; outages are simulated with a scripted store.
"""

from __future__ import annotations

import logging

import pytest

from fairway.resources.errors import ErrorCode
from fairway.resources.query_parser import FilterSpec
from fairway.resources.resource_service import ResourceService, apply_filters
from fairway.resources.store import (
    StoreConnectionError,
    StoreNoRowsError,
    StoreQueryError,
    StoreResult,
)
from tests.fakes import ScriptedQuery, ScriptedStore


def _seed_courses(resources: ResourceService, count: int) -> None:
    response = resources.insert_batch(
        "courses", [{"name": f"Course {index:02d}", "par": 70 + index % 3} for index in range(count)]
    )
    assert response.ok


def test_fetch_by_id_returns_app_case_record(resources: ResourceService) -> None:
    created = resources.insert_record("courses", {"name": "Old Course", "phoneNumber": "555"})

    fetched = resources.fetch_by_id("courses", created.data["id"])

    assert fetched.ok
    assert fetched.data["phoneNumber"] == "555"
    assert "phone_number" not in fetched.data


def test_fetch_by_id_missing_is_not_found(resources: ResourceService) -> None:
    response = resources.fetch_by_id("courses", "missing-id")

    assert response.status == "error"
    assert response.data is None
    assert response.error.code is ErrorCode.DB_NOT_FOUND


def test_fetch_records_paginates_and_reports_metadata(resources: ResourceService) -> None:
    _seed_courses(resources, 25)

    response = resources.fetch_records(
        "courses",
        {"pagination": {"page": 3, "limit": 10}, "ordering": {"column": "name"}},
    )

    assert response.ok
    assert [row["name"] for row in response.data] == [f"Course {index:02d}" for index in range(20, 25)]
    assert response.metadata.to_dict() == {
        "page": 3,
        "limit": 10,
        "total": 25,
        "totalPages": 3,
        "hasMore": False,
    }


def test_fetch_records_applies_filters_and_default_direction(resources: ResourceService) -> None:
    _seed_courses(resources, 6)

    response = resources.fetch_records(
        "courses",
        {"filters": {"par": {"gte": 71}}, "ordering": {"column": "name"}},
        default_direction="desc",
    )

    assert [row["name"] for row in response.data] == [
        "Course 05",
        "Course 04",
        "Course 02",
        "Course 01",
    ]
    assert response.metadata.total == 4


def test_fetch_records_like_wraps_the_value(resources: ResourceService) -> None:
    resources.insert_batch("courses", [{"name": "Royal Troon"}, {"name": "Troon North"}, {"name": "Muirfield"}])

    response = resources.fetch_records("courses", {"filters": {"name": {"like": "Troon"}}})

    assert {row["name"] for row in response.data} == {"Royal Troon", "Troon North"}


def test_fetch_records_under_store_failure_returns_zeroed_metadata() -> None:
    resources = ResourceService(ScriptedStore(default=StoreConnectionError("down")))

    response = resources.fetch_records("courses", {"pagination": {"page": 2, "limit": 5}})

    assert response.status == "error"
    assert response.data is None
    assert response.error.code is ErrorCode.DB_QUERY_ERROR
    assert response.metadata.to_dict() == {
        "page": 2,
        "limit": 5,
        "total": 0,
        "totalPages": 0,
        "hasMore": False,
    }


def test_fetch_records_with_infinite_pagination_uses_defaults(resources: ResourceService) -> None:
    _seed_courses(resources, 3)

    response = resources.fetch_records(
        "courses", {"pagination": {"page": float("inf"), "limit": float("inf")}}
    )

    assert response.ok
    assert response.metadata.page == 1
    assert response.metadata.limit == 10
    assert len(response.data) == 3


def test_fetch_records_offset_comes_from_page_and_limit() -> None:
    store = ScriptedStore(StoreResult(data=[], count=0))
    resources = ResourceService(store)

    resources.fetch_records("courses", {"pagination": {"page": 4, "limit": 15}})

    query = store.executed[0]
    assert ("range", (45, 59), {}) in query.calls


def test_insert_batch_empty_skips_the_store() -> None:
    store = ScriptedStore()
    resources = ResourceService(store)

    response = resources.insert_batch("courses", [])

    assert response.status == "success"
    assert response.data == []
    assert store.queries == []


def test_insert_converts_keys_to_store_case() -> None:
    store = ScriptedStore(StoreResult(data={"id": 1, "tee_name": "Blue"}))
    resources = ResourceService(store)

    response = resources.insert_record("course_tees", {"teeName": "Blue", "courseId": 4})

    assert response.data == {"id": 1, "teeName": "Blue"}
    assert store.executed[0].calls[0] == ("insert", ({"tee_name": "Blue", "course_id": 4},), {})


def test_insert_rejects_non_mapping(resources: ResourceService) -> None:
    response = resources.insert_record("courses", ["name"])  # type: ignore[arg-type]

    assert response.error.code is ErrorCode.VALIDATION_ERROR


def test_insert_constraint_violation(resources: ResourceService) -> None:
    resources.insert_record("profiles", {"id": "u-1"})

    response = resources.insert_record("profiles", {"id": "u-1"})

    assert response.error.code is ErrorCode.DB_CONSTRAINT_VIOLATION


def test_update_record(resources: ResourceService) -> None:
    created = resources.insert_record("courses", {"name": "Old Course", "par": 72})

    response = resources.update_record("courses", created.data["id"], {"par": 71})

    assert response.ok
    assert response.data["par"] == 71


def test_update_with_no_fields_is_a_validation_error(resources: ResourceService) -> None:
    response = resources.update_record("courses", 1, {})

    assert response.error.code is ErrorCode.VALIDATION_ERROR


def test_update_missing_row_is_not_found(resources: ResourceService) -> None:
    response = resources.update_record("courses", 404, {"par": 70})

    assert response.error.code is ErrorCode.DB_NOT_FOUND


def test_delete_record(resources: ResourceService) -> None:
    created = resources.insert_record("courses", {"name": "Old Course"})

    response = resources.delete_record("courses", created.data["id"])

    assert response.ok
    assert response.data is None
    assert resources.fetch_by_id("courses", created.data["id"]).error.code is ErrorCode.DB_NOT_FOUND


def test_delete_where_then_count_is_zero(resources: ResourceService) -> None:
    resources.insert_batch(
        "scores",
        [
            {"roundId": 7, "holeNumber": 1, "strokes": 4},
            {"roundId": 7, "holeNumber": 2, "strokes": 5},
            {"roundId": 8, "holeNumber": 1, "strokes": 3},
        ],
    )

    assert resources.delete_where("scores", "round_id", 7).ok
    assert resources.count("scores", {"round_id": 7}).data == 0
    assert resources.count("scores", {"round_id": 8}).data == 1


def test_delete_where_requires_a_column(resources: ResourceService) -> None:
    with pytest.raises(ValueError):
        resources.delete_where("scores", "", 7)


def test_count_ignores_none_filters(resources: ResourceService) -> None:
    _seed_courses(resources, 4)

    assert resources.count("courses").data == 4
    assert resources.count("courses", {"par": None}).data == 4
    assert resources.count("courses", {"par": 70}).data == 2


def test_raw_query_uses_execute_sql_procedure() -> None:
    store = ScriptedStore(StoreResult(data=[{"total": 3}]))
    resources = ResourceService(store)

    response = resources.raw_query("SELECT count(*) AS total FROM rounds WHERE user_id = ?", ["u-1"])

    assert response.data == [{"total": 3}]
    assert store.rpc_calls == [
        (
            "execute_sql",
            {"query": "SELECT count(*) AS total FROM rounds WHERE user_id = ?", "params": ["u-1"]},
        )
    ]


def test_raw_query_failure_is_a_query_error() -> None:
    resources = ResourceService(ScriptedStore(StoreQueryError("syntax")))

    response = resources.raw_query("SELEC 1")

    assert response.error.code is ErrorCode.DB_QUERY_ERROR


def test_unclassified_failures_use_the_call_site_default() -> None:
    resources = ResourceService(ScriptedStore(default=RuntimeError("driver exploded")))

    assert resources.fetch_by_id("courses", 1).error.code is ErrorCode.DB_NOT_FOUND
    assert resources.insert_record("courses", {"name": "x"}).error.code is ErrorCode.DB_CONSTRAINT_VIOLATION
    assert resources.delete_record("courses", 1).error.code is ErrorCode.DB_QUERY_ERROR
    assert resources.count("courses").error.code is ErrorCode.DB_QUERY_ERROR


def test_unsafe_table_names_are_rejected(resources: ResourceService) -> None:
    with pytest.raises(ValueError):
        resources.fetch_by_id("", 1)
    with pytest.raises(ValueError):
        resources.table("courses; --")


def test_failures_are_logged_once_at_the_right_level(caplog: pytest.LogCaptureFixture) -> None:
    resources = ResourceService(ScriptedStore(StoreNoRowsError("none"), StoreConnectionError("down")))

    with caplog.at_level(logging.DEBUG, logger="fairway"):
        resources.fetch_by_id("courses", 1)
        resources.fetch_by_id("courses", 2)

    records = [record for record in caplog.records if "Failed to fetch record" in record.getMessage()]
    assert [record.levelno for record in records] == [logging.WARNING, logging.ERROR]


def test_table_resource_binds_the_table_name(resources: ResourceService) -> None:
    courses = resources.table("courses")

    created = courses.insert_record({"name": "Old Course"})

    assert courses.fetch_by_id(created.data["id"]).data["name"] == "Old Course"
    assert courses.count().data == 1
    assert courses.fetch_records().metadata.total == 1


def test_apply_filters_maps_operators_to_builder_calls() -> None:
    query = ScriptedQuery(ScriptedStore(), "courses")

    apply_filters(
        query,
        (
            FilterSpec("name", "ilike", "links"),
            FilterSpec("id", "in", 3),
            FilterSpec("par", "lte", 72),
            FilterSpec("par", "unknown", 1),
        ),
    )

    assert query.calls == [
        ("ilike", ("name", "%links%"), {}),
        ("in_", ("id", [3]), {}),
        ("lte", ("par", 72), {}),
    ]


def test_fetch_records_failure_log_names_the_ordering(caplog: pytest.LogCaptureFixture) -> None:
    resources = ResourceService(ScriptedStore(default=StoreQueryError("boom")))

    with caplog.at_level(logging.DEBUG, logger="fairway"):
        resources.fetch_records("rounds", {"ordering": {"column": "round_date"}}, default_direction="desc")

    messages = [record.getMessage() for record in caplog.records if record.levelno == logging.ERROR]
    assert len(messages) == 1
    assert "'ordering': 'round_date:desc'" in messages[0]
