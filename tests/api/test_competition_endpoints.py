# This file tests series and event endpoints, including participant membership routes.

from __future__ import annotations

from fairway.resources.sql_store import SqlAlchemyStore
from tests.api.support import api_test_client


def test_series_membership_flow(store: SqlAlchemyStore) -> None:
    with api_test_client(store=store) as client:
        series = client.post(
            "/api/v1/series", json={"name": "Winter League", "startDate": "2026-01-01"}
        ).json()["data"]
        joined = client.post(
            f"/api/v1/series/{series['id']}/participants", json={"userId": "u-1"}
        )
        bad_role = client.post(
            f"/api/v1/series/{series['id']}/participants", json={"userId": "u-2", "role": "captain"}
        )
        confirmed = client.patch(
            f"/api/v1/series/participants/{joined.json()['data']['id']}",
            json={"status": "confirmed"},
        )
        participations = client.get("/api/v1/series/users/u-1/participations")
        detail = client.get(f"/api/v1/series/{series['id']}", params={"includeParticipants": "true"})

    assert joined.status_code == 201
    assert bad_role.status_code == 400
    assert confirmed.json()["data"]["status"] == "confirmed"
    assert participations.json()["data"][0]["seriesName"] == "Winter League"
    assert participations.json()["data"][0]["participantStatus"] == "confirmed"
    assert [row["userId"] for row in detail.json()["data"]["participants"]] == ["u-1"]


def test_event_registration_flow(store: SqlAlchemyStore) -> None:
    with api_test_client(store=store) as client:
        missing_date = client.post("/api/v1/events", json={"name": "Medal"})
        event = client.post(
            "/api/v1/events", json={"name": "Medal", "eventDate": "2026-07-04"}
        ).json()["data"]
        registered = client.post(
            f"/api/v1/events/{event['id']}/participants", json={"userId": "u-1", "startingHole": 10}
        )
        listed = client.get("/api/v1/events/users/u-1/participations")
        removed = client.delete(f"/api/v1/events/participants/{registered.json()['data']['id']}")
        deleted = client.delete(f"/api/v1/events/{event['id']}")

    assert missing_date.status_code == 400
    assert registered.json()["data"]["status"] == "registered"
    assert listed.json()["data"][0]["eventName"] == "Medal"
    assert removed.status_code == 200
    assert deleted.status_code == 200
