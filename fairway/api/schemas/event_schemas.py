# This file defines request bodies for event and event participant endpoints.

from __future__ import annotations

from datetime import date

from fairway.api.schemas.common import BodyModel


class EventCreate(BodyModel):
    name: str
    event_date: date
    description: str | None = None
    event_format: str | None = None
    status: str | None = None
    course_id: int | str | None = None
    series_id: int | str | None = None
    max_participants: int | None = None
    created_by: str | None = None


class EventUpdate(BodyModel):
    name: str | None = None
    event_date: date | None = None
    description: str | None = None
    event_format: str | None = None
    status: str | None = None
    course_id: int | str | None = None
    series_id: int | str | None = None
    max_participants: int | None = None


class EventParticipantCreate(BodyModel):
    user_id: str
    status: str | None = None
    tee_time: str | None = None
    starting_hole: int | None = None
    group_number: int | None = None
    handicap_index: float | None = None


class EventParticipantUpdate(BodyModel):
    status: str | None = None
    tee_time: str | None = None
    starting_hole: int | None = None
    group_number: int | None = None
    handicap_index: float | None = None
