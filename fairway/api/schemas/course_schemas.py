# This file defines request bodies for course and course tee endpoints.

from __future__ import annotations

from fairway.api.schemas.common import BodyModel


class CourseCreate(BodyModel):
    name: str
    location: str | None = None
    holes: int | None = None
    par: int | None = None
    phone_number: str | None = None
    website: str | None = None
    amenities: str | None = None


class CourseUpdate(BodyModel):
    name: str | None = None
    location: str | None = None
    holes: int | None = None
    par: int | None = None
    phone_number: str | None = None
    website: str | None = None
    amenities: str | None = None


class CourseTeeCreate(BodyModel):
    tee_name: str
    gender: str
    par: int | None = None
    course_rating: float | None = None
    slope_rating: int | None = None
    yardage: int | None = None


class CourseTeeUpdate(BodyModel):
    tee_name: str | None = None
    gender: str | None = None
    par: int | None = None
    course_rating: float | None = None
    slope_rating: int | None = None
    yardage: int | None = None
