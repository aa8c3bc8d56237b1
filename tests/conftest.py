"""
Shared test configuration.
Seeds required environment variables and provides an in-memory SQLite database with the application tables.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "fairway-test",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": "sqlite+pysqlite:///:memory:",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
}

# The app module builds its config on import, which happens during collection.
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from fairway.resources.resource_service import ResourceService  # noqa: E402
from fairway.resources.sql_store import SqlAlchemyStore  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


def build_metadata() -> sa.MetaData:
    """Application tables with integer ids, mirroring the production schema closely enough for tests."""

    metadata = sa.MetaData()
    sa.Table(
        "courses",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("location", sa.String),
        sa.Column("holes", sa.Integer),
        sa.Column("par", sa.Integer),
        sa.Column("phone_number", sa.String),
        sa.Column("website", sa.String),
        sa.Column("amenities", sa.String),
    )
    sa.Table(
        "course_tees",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.Integer, nullable=False),
        sa.Column("tee_name", sa.String, nullable=False),
        sa.Column("gender", sa.String, nullable=False),
        sa.Column("par", sa.Integer),
        sa.Column("course_rating", sa.Float),
        sa.Column("slope_rating", sa.Integer),
        sa.Column("yardage", sa.Integer),
    )
    sa.Table(
        "series",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("description", sa.String),
        sa.Column("series_type", sa.String),
        sa.Column("start_date", sa.String),
        sa.Column("end_date", sa.String),
        sa.Column("status", sa.String),
        sa.Column("created_by", sa.String),
    )
    sa.Table(
        "series_participants",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("series_id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.String, nullable=False),
        sa.Column("role", sa.String),
        sa.Column("status", sa.String),
        sa.Column("joined_at", sa.String),
        sa.UniqueConstraint("series_id", "user_id"),
    )
    sa.Table(
        "events",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("description", sa.String),
        sa.Column("event_date", sa.String, nullable=False),
        sa.Column("event_format", sa.String),
        sa.Column("status", sa.String),
        sa.Column("course_id", sa.Integer),
        sa.Column("series_id", sa.Integer),
        sa.Column("max_participants", sa.Integer),
        sa.Column("created_by", sa.String),
    )
    sa.Table(
        "event_participants",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.String, nullable=False),
        sa.Column("status", sa.String),
        sa.Column("registration_date", sa.String),
        sa.Column("tee_time", sa.String),
        sa.Column("starting_hole", sa.Integer),
        sa.Column("group_number", sa.Integer),
        sa.Column("handicap_index", sa.Float),
    )
    sa.Table(
        "rounds",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String, nullable=False),
        sa.Column("event_id", sa.Integer),
        sa.Column("course_tee_id", sa.Integer),
        sa.Column("round_date", sa.String, nullable=False),
        sa.Column("status", sa.String),
        sa.Column("handicap_index_used", sa.Float),
        sa.Column("course_handicap", sa.Integer),
        sa.Column("net_score", sa.Integer),
        sa.Column("gross_score", sa.Integer),
    )
    sa.Table(
        "scores",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_id", sa.Integer, nullable=False),
        sa.Column("hole_number", sa.Integer, nullable=False),
        sa.Column("strokes", sa.Integer, nullable=False),
        sa.Column("putts", sa.Integer),
        sa.Column("fairway_hit", sa.Boolean),
        sa.Column("green_in_regulation", sa.Boolean),
        sa.UniqueConstraint("round_id", "hole_number"),
    )
    sa.Table(
        "profiles",
        metadata,
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("first_name", sa.String),
        sa.Column("last_name", sa.String),
        sa.Column("username", sa.String, unique=True),
        sa.Column("handicap", sa.Float),
        sa.Column("is_admin", sa.Boolean, default=False),
    )
    return metadata


@pytest.fixture
def metadata() -> sa.MetaData:
    return build_metadata()


@pytest.fixture
def engine(metadata: sa.MetaData) -> Iterator[Engine]:
    test_engine = sa.create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(test_engine)
    try:
        yield test_engine
    finally:
        test_engine.dispose()


@pytest.fixture
def store(engine: Engine, metadata: sa.MetaData) -> SqlAlchemyStore:
    return SqlAlchemyStore(engine, metadata=metadata)


@pytest.fixture
def resources(store: SqlAlchemyStore) -> ResourceService:
    return ResourceService(store, sleep=lambda _seconds: None)
