# This file defines request bodies for round and hole score endpoints.
# Range checks on hole numbers and strokes are left to the round service.

from __future__ import annotations

from datetime import date

from fairway.api.schemas.common import BodyModel


class RoundCreate(BodyModel):
    user_id: str
    round_date: date
    event_id: int | str | None = None
    course_tee_id: int | str | None = None
    status: str | None = None
    handicap_index_used: float | None = None
    course_handicap: int | None = None
    net_score: int | None = None
    gross_score: int | None = None


class RoundUpdate(BodyModel):
    round_date: date | None = None
    status: str | None = None
    handicap_index_used: float | None = None
    course_handicap: int | None = None
    net_score: int | None = None
    gross_score: int | None = None


class ScoreCreate(BodyModel):
    hole_number: int
    strokes: int
    putts: int | None = None
    fairway_hit: bool | None = None
    green_in_regulation: bool | None = None


class ScoreUpdate(BodyModel):
    strokes: int | None = None
    putts: int | None = None
    fairway_hit: bool | None = None
    green_in_regulation: bool | None = None
