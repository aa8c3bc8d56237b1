# This file provides dependency factories for FastAPI routes.
# The engine and table metadata are cached for the process; stores and services are built per request.
# Routers stay thin and endpoint tests can swap the store or config through dependency overrides.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy import MetaData
from sqlalchemy.engine import Engine

from fairway.api.api_config import ApiConfig, get_api_config
from fairway.common.db import build_engine
from fairway.common.settings import get_settings
from fairway.resources.query_parser import QueryParser
from fairway.resources.resource_service import ResourceService
from fairway.resources.sql_store import SqlAlchemyStore
from fairway.services.auth_service import AuthService
from fairway.services.course_service import CourseService
from fairway.services.event_service import EventService
from fairway.services.round_service import RoundService
from fairway.services.series_service import SeriesService


def get_config() -> ApiConfig:
    return get_api_config()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(
        settings.DATABASE_URL,
        pool_size=settings.DATABASE_POOL_SIZE,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT_SECONDS,
    )


@lru_cache(maxsize=1)
def get_metadata() -> MetaData:
    return MetaData()


def get_store() -> SqlAlchemyStore:
    return SqlAlchemyStore(get_engine(), metadata=get_metadata())


ConfigDep = Annotated[ApiConfig, Depends(get_config)]
StoreDep = Annotated[SqlAlchemyStore, Depends(get_store)]


def get_resource_service(store: StoreDep, config: ConfigDep) -> ResourceService:
    return ResourceService(store, parser=QueryParser(default_limit=config.default_page_size))


ResourcesDep = Annotated[ResourceService, Depends(get_resource_service)]


def get_course_service(resources: ResourcesDep, config: ConfigDep) -> CourseService:
    return CourseService(
        resources,
        courses_table=config.courses_table_name,
        tees_table=config.course_tees_table_name,
    )


def get_series_service(resources: ResourcesDep, config: ConfigDep) -> SeriesService:
    return SeriesService(
        resources,
        series_table=config.series_table_name,
        participants_table=config.series_participants_table_name,
    )


def get_event_service(resources: ResourcesDep, config: ConfigDep) -> EventService:
    return EventService(
        resources,
        events_table=config.events_table_name,
        participants_table=config.event_participants_table_name,
    )


def get_round_service(resources: ResourcesDep, config: ConfigDep) -> RoundService:
    return RoundService(
        resources,
        rounds_table=config.rounds_table_name,
        scores_table=config.scores_table_name,
    )


def get_auth_service(resources: ResourcesDep, config: ConfigDep) -> AuthService:
    return AuthService(resources, profiles_table=config.profiles_table_name)
