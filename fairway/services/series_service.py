# This file implements series and series participant operations on top of the generic resource service.
# It exists so a series can be fetched with its participants and a user's memberships listed in one call.
# Participant role and status values are validated here before any store round trip.
# Deleting a series removes its participants first; the deletes are not wrapped in a transaction.

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
from fairway.services._helpers import CHILD_ROWS_LIMIT, child_query, missing_fields, reject

PARTICIPANT_ROLES = ("admin", "participant")
PARTICIPANT_STATUSES = ("invited", "confirmed", "withdrawn")


class SeriesService:
    """Series of events and the players taking part in them."""

    def __init__(
        self,
        resources: ResourceService,
        *,
        series_table: str = "series",
        participants_table: str = "series_participants",
    ) -> None:
        self.resources = resources
        self.series = resources.table(series_table)
        self.participants = resources.table(participants_table)

    def create_series(self, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if missing_fields(payload, ("name",)):
            return reject(self.resources, "Series name is required", {"table": self.series.name})
        return self.series.insert_record(payload)

    def get_series(self, series_id: Any) -> ServiceResponse[Record]:
        return self.series.fetch_by_id(series_id)

    def update_series(self, series_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.series.update_record(series_id, data)

    def delete_series(self, series_id: Any) -> ServiceResponse[None]:
        removed = self.participants.delete_where("series_id", series_id)
        if not removed.ok:
            return removed
        return self.series.delete_record(series_id)

    def list_series(self, query_params: Mapping[str, Any] | None = None) -> PaginatedResponse[Record]:
        params = dict(query_params or {})
        params.setdefault("ordering", {"column": "start_date"})
        return self.series.fetch_records(params, default_direction="desc")

    def add_series_participant(
        self, series_id: Any, data: Mapping[str, Any]
    ) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if missing_fields(payload, ("userId",)):
            return reject(self.resources, "Participant userId is required", {"series_id": series_id})
        payload.setdefault("role", "participant")
        payload.setdefault("status", "invited")
        invalid = self._invalid_membership(payload)
        if invalid is not None:
            return reject(self.resources, invalid, {"series_id": series_id})
        payload["seriesId"] = series_id
        return self.participants.insert_record(payload)

    def update_series_participant(
        self, participant_id: Any, data: Mapping[str, Any]
    ) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        invalid = self._invalid_membership(payload)
        if invalid is not None:
            return reject(self.resources, invalid, {"participant_id": participant_id})
        return self.participants.update_record(participant_id, payload)

    def remove_series_participant(self, participant_id: Any) -> ServiceResponse[None]:
        return self.participants.delete_record(participant_id)

    def get_series_with_participants(self, series_id: Any) -> ServiceResponse[Record]:
        series = self.series.fetch_by_id(series_id)
        if not series.ok:
            return series
        participants = self.participants.fetch_records(
            child_query("series_id", series_id, order_by="joined_at")
        )
        if not participants.ok:
            return create_error_response(participants.error)
        return create_success_response({**series.data, "participants": participants.data})

    def list_user_series_participations(self, user_id: Any) -> ServiceResponse[list[Record]]:
        """Return one flat row per series the user belongs to, newest membership first.

        Memberships whose series no longer exists are skipped.
        """

        memberships = self.participants.fetch_records(
            {
                "pagination": {"page": 1, "limit": CHILD_ROWS_LIMIT},
                "filters": {"user_id": user_id},
                "ordering": {"column": "joined_at", "direction": "desc"},
            }
        )
        if not memberships.ok:
            return create_error_response(memberships.error)
        if not memberships.data:
            return create_success_response([])

        series_ids = sorted({row["seriesId"] for row in memberships.data})
        series = self.series.fetch_records(
            {
                "pagination": {"page": 1, "limit": len(series_ids)},
                "filters": {"id": {"in": series_ids}},
            }
        )
        if not series.ok:
            return create_error_response(series.error)
        by_id = {row["id"]: row for row in series.data}

        flattened: list[Record] = []
        for membership in memberships.data:
            parent = by_id.get(membership["seriesId"])
            if parent is None:
                continue
            flattened.append(
                {
                    "participantId": membership["id"],
                    "userId": membership["userId"],
                    "seriesId": membership["seriesId"],
                    "role": membership.get("role"),
                    "participantStatus": membership.get("status"),
                    "joinedAt": membership.get("joinedAt"),
                    "seriesName": parent.get("name"),
                    "seriesDescription": parent.get("description"),
                    "seriesStartDate": parent.get("startDate"),
                    "seriesEndDate": parent.get("endDate"),
                    "seriesStatus": parent.get("status"),
                    "seriesCreatedBy": parent.get("createdBy"),
                }
            )
        return create_success_response(flattened)

    @staticmethod
    def _invalid_membership(payload: Mapping[str, Any]) -> str | None:
        if "role" in payload and payload["role"] not in PARTICIPANT_ROLES:
            return f"Participant role must be one of: {', '.join(PARTICIPANT_ROLES)}"
        if "status" in payload and payload["status"] not in PARTICIPANT_STATUSES:
            return f"Participant status must be one of: {', '.join(PARTICIPANT_STATUSES)}"
        return None
