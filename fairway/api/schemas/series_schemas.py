# This file defines request bodies for series and series participant endpoints.

from __future__ import annotations

from datetime import date

from fairway.api.schemas.common import BodyModel


class SeriesCreate(BodyModel):
    name: str
    description: str | None = None
    series_type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    created_by: str | None = None


class SeriesUpdate(BodyModel):
    name: str | None = None
    description: str | None = None
    series_type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None


class SeriesParticipantCreate(BodyModel):
    user_id: str
    role: str | None = None
    status: str | None = None


class SeriesParticipantUpdate(BodyModel):
    role: str | None = None
    status: str | None = None
