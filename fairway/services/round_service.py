# This file implements round and hole score operations on top of the generic resource service.
# It exists so a scorecard (a round plus its hole scores) is read and cleaned up as one unit.
# Hole numbers are 1-18 and strokes are at least 1; both are checked before the store is called.
# Deleting a round removes its scores first and stops there if that cleanup fails.

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
from fairway.services._helpers import child_query, missing_fields, reject

FIRST_HOLE = 1
LAST_HOLE = 18


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _score_problem(payload: Mapping[str, Any]) -> str | None:
    if "holeNumber" in payload:
        hole = payload["holeNumber"]
        if not _is_int(hole) or not FIRST_HOLE <= hole <= LAST_HOLE:
            return f"Hole number must be between {FIRST_HOLE} and {LAST_HOLE}"
    if "strokes" in payload:
        strokes = payload["strokes"]
        if not _is_int(strokes) or strokes < 1:
            return "Strokes must be at least 1"
    return None


class RoundService:
    """Rounds played and their hole-by-hole scores."""

    def __init__(
        self,
        resources: ResourceService,
        *,
        rounds_table: str = "rounds",
        scores_table: str = "scores",
    ) -> None:
        self.resources = resources
        self.rounds = resources.table(rounds_table)
        self.scores = resources.table(scores_table)

    def create_round(self, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        missing = missing_fields(payload, ("userId", "roundDate"))
        if missing:
            return reject(
                self.resources,
                f"Missing round fields: {', '.join(missing)}",
                {"table": self.rounds.name},
            )
        return self.rounds.insert_record(payload)

    def get_round(self, round_id: Any) -> ServiceResponse[Record]:
        return self.rounds.fetch_by_id(round_id)

    def update_round(self, round_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        return self.rounds.update_record(round_id, data)

    def delete_round(self, round_id: Any) -> ServiceResponse[None]:
        removed = self.scores.delete_where("round_id", round_id)
        if not removed.ok:
            return removed
        return self.rounds.delete_record(round_id)

    def list_rounds(self, query_params: Mapping[str, Any] | None = None) -> PaginatedResponse[Record]:
        params = dict(query_params or {})
        params.setdefault("ordering", {"column": "round_date"})
        return self.rounds.fetch_records(params, default_direction="desc")

    def add_score(self, round_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        missing = missing_fields(payload, ("holeNumber", "strokes"))
        if missing:
            return reject(
                self.resources, f"Missing score fields: {', '.join(missing)}", {"round_id": round_id}
            )
        problem = _score_problem(payload)
        if problem is not None:
            return reject(self.resources, problem, {"round_id": round_id})
        payload["roundId"] = round_id
        return self.scores.insert_record(payload)

    def update_score(self, score_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        payload = to_app_case(dict(data))
        problem = _score_problem(payload)
        if problem is not None:
            return reject(self.resources, problem, {"score_id": score_id})
        return self.scores.update_record(score_id, payload)

    def remove_score(self, score_id: Any) -> ServiceResponse[None]:
        return self.scores.delete_record(score_id)

    def get_round_with_scores(self, round_id: Any) -> ServiceResponse[Record]:
        round_ = self.rounds.fetch_by_id(round_id)
        if not round_.ok:
            return round_
        scores = self.scores.fetch_records(child_query("round_id", round_id, order_by="hole_number"))
        if not scores.ok:
            return create_error_response(scores.error)
        return create_success_response({**round_.data, "scores": scores.data})
