# This file defines request bodies for profile endpoints.

from __future__ import annotations

from fairway.api.schemas.common import BodyModel


class ProfileCreate(BodyModel):
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    handicap: float | None = None


class ProfileUpdate(BodyModel):
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    handicap: float | None = None
