# This file implements event and event participant operations on top of the generic resource service.
# It exists so an event can be fetched with its field and a player's registrations listed in one call.
# Deleting an event removes its participants first; the deletes are not wrapped in a transaction.

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

REGISTRATION_STATUSES = ("registered", "confirmed", "withdrawn", "no_show")


class EventService:
    """Events and the players registered for them."""

    def __init__(
        self,
        resources: ResourceService,
        *,
        events_table: str = "events",
        participants_table: str = "event_participants",
    ) -> None:
        self.resources = resources
        self.events = resources.table(events_table)
        self.participants = resources.table(participants_table)

    def create_event(self, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        missing = missing_fields(payload, ("name", "eventDate"))
        if missing:
            return reject(
                self.resources,
                f"Missing event fields: {', '.join(missing)}",
                {"table": self.events.name},
            )
        return self.events.insert_record(payload)

    def get_event(self, event_id: Any) -> ServiceResponse[Record]:
        return self.events.fetch_by_id(event_id)

    def update_event(self, event_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.events.update_record(event_id, data)

    def delete_event(self, event_id: Any) -> ServiceResponse[None]:
        removed = self.participants.delete_where("event_id", event_id)
        if not removed.ok:
            return removed
        return self.events.delete_record(event_id)

    def list_events(self, query_params: Mapping[str, Any] | None = None) -> PaginatedResponse[Record]:
        params = dict(query_params or {})
        params.setdefault("ordering", {"column": "event_date"})
        return self.events.fetch_records(params, default_direction="desc")

    def add_event_participant(self, event_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if missing_fields(payload, ("userId",)):
            return reject(self.resources, "Participant userId is required", {"event_id": event_id})
        payload.setdefault("status", "registered")
        if payload["status"] not in REGISTRATION_STATUSES:
            return reject(
                self.resources,
                f"Registration status must be one of: {', '.join(REGISTRATION_STATUSES)}",
                {"event_id": event_id, "status": payload["status"]},
            )
        payload["eventId"] = event_id
        return self.participants.insert_record(payload)

    def update_event_participant(
        self, participant_id: Any, data: Mapping[str, Any]
    ) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        if "status" in payload and payload["status"] not in REGISTRATION_STATUSES:
            return reject(
                self.resources,
                f"Registration status must be one of: {', '.join(REGISTRATION_STATUSES)}",
                {"participant_id": participant_id, "status": payload["status"]},
            )
        return self.participants.update_record(participant_id, payload)

    def remove_event_participant(self, participant_id: Any) -> ServiceResponse[None]:
        return self.participants.delete_record(participant_id)

    def get_event_with_participants(self, event_id: Any) -> ServiceResponse[Record]:
        event = self.events.fetch_by_id(event_id)
        if not event.ok:
            return event
        participants = self.participants.fetch_records(child_query("event_id", event_id, order_by="id"))
        if not participants.ok:
            return create_error_response(participants.error)
        return create_success_response({**event.data, "participants": participants.data})

    def list_user_event_participations(self, user_id: Any) -> ServiceResponse[list[Record]]:
        """Flatten a player's registrations with the event they point at, soonest event first."""

        registrations = self.participants.fetch_records(
            {"pagination": {"page": 1, "limit": CHILD_ROWS_LIMIT}, "filters": {"user_id": user_id}}
        )
        if not registrations.ok:
            return create_error_response(registrations.error)
        if not registrations.data:
            return create_success_response([])

        event_ids = sorted({row["eventId"] for row in registrations.data})
        events = self.events.fetch_records(
            {
                "pagination": {"page": 1, "limit": len(event_ids)},
                "filters": {"id": {"in": event_ids}},
            }
        )
        if not events.ok:
            return create_error_response(events.error)
        by_id = {row["id"]: row for row in events.data}

        flattened: list[Record] = []
        for registration in registrations.data:
            event = by_id.get(registration["eventId"])
            if event is None:
                continue
            flattened.append(
                {
                    "participantId": registration["id"],
                    "userId": registration["userId"],
                    "eventId": registration["eventId"],
                    "participantStatus": registration.get("status"),
                    "teeTime": registration.get("teeTime"),
                    "handicapIndex": registration.get("handicapIndex"),
                    "eventName": event.get("name"),
                    "eventDate": event.get("eventDate"),
                    "eventStatus": event.get("status"),
                    "courseId": event.get("courseId"),
                    "seriesId": event.get("seriesId"),
                }
            )
        flattened.sort(key=lambda row: (row["eventDate"] is None, str(row["eventDate"] or "")))
        return create_success_response(flattened)
