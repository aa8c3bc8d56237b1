# This file tests profile endpoints against an in-memory database.

from __future__ import annotations

from fairway.resources.sql_store import SqlAlchemyStore
from tests.api.support import api_test_client


def test_profile_lifecycle(store: SqlAlchemyStore) -> None:
    with api_test_client(store=store) as client:
        created = client.post("/api/v1/profiles/u-1", json={"firstName": "Ada", "handicap": 8.2})
        duplicate = client.post("/api/v1/profiles/u-1", json={})
        updated = client.patch("/api/v1/profiles/u-1", json={"lastName": "Lovelace"})
        id_change = client.patch("/api/v1/profiles/u-1", json={"id": "u-2"})
        admin = client.get("/api/v1/profiles/u-1/admin")
        missing = client.get("/api/v1/profiles/u-404")

    assert created.status_code == 201
    assert created.json()["data"]["id"] == "u-1"
    assert duplicate.status_code == 409
    assert updated.json()["data"]["lastName"] == "Lovelace"
    assert id_change.status_code == 400
    assert admin.json()["data"] is False
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "DB_NOT_FOUND"
