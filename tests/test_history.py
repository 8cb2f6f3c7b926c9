"""Tests for the interaction history endpoints."""

from __future__ import annotations

import json

from studymate_app.models import HistoryItem
from studymate_app.services import history_service


def _append(client, user_id, query, response="ok", kind="research"):
    return client.post(
        "/api/history",
        json={"userId": user_id, "type": kind, "query": query, "response": response},
    )


def test_history_is_newest_first(client, user_factory):
    user_id = user_factory()
    for idx in range(3):
        assert _append(client, user_id, f"topic {idx}").status_code == 201

    items = client.get(f"/api/history/{user_id}").get_json()
    assert [item["query"] for item in items] == ["topic 2", "topic 1", "topic 0"]
    assert items[0]["type"] == "research"


def test_history_is_capped(client, user_factory):
    user_id = user_factory()
    for idx in range(25):
        _append(client, user_id, f"q{idx}")

    items = client.get(f"/api/history/{user_id}").get_json()
    assert len(items) == 20
    assert items[0]["query"] == "q24"
    assert HistoryItem.query.filter_by(user_id=user_id).count() == 25


def test_structured_response_is_stored_as_json(client, user_factory):
    user_id = user_factory()
    result = {"titles": ["A"], "questions": [], "outline": [], "methodology": "survey"}
    resp = _append(client, user_id, "Climate", response=result)
    item_id = resp.get_json()["id"]

    items = client.get(f"/api/history/{user_id}").get_json()
    assert items[0]["id"] == item_id
    assert json.loads(items[0]["response"]) == result


def test_invalid_type_is_rejected(client, user_factory):
    user_id = user_factory()
    resp = _append(client, user_id, "x", kind="chat")
    assert resp.status_code == 400
    assert "type" in resp.get_json()["errors"]


def test_history_unknown_user(client):
    assert client.get("/api/history/321").status_code == 404
    assert _append(client, 321, "x").status_code == 404


def test_recent_limit_never_exceeds_cap(app_with_db, user_factory):
    user_id = user_factory()
    for idx in range(5):
        history_service.append(user_id, "explainer", f"t{idx}", "text")

    assert len(history_service.recent(user_id, limit=2)) == 2
    assert len(history_service.recent(user_id, limit=500)) == 5
