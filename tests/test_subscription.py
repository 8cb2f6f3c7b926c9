"""Tests for premium upgrades and the subscription log."""

from __future__ import annotations

import pytest

from studymate_app.extensions import db
from studymate_app.models import SubscriptionLog, User
from studymate_app.services import subscription_service


def test_upgrade_sets_premium(client, user_factory):
    user_id = user_factory()
    resp = client.post("/api/subscription/upgrade", json={"userId": user_id, "plan": "yearly"})
    assert resp.status_code == 200
    assert resp.get_json()["subscription"] == "premium"
    assert db.session.get(User, user_id).subscription == "premium"


def test_upgrade_is_idempotent_but_logged_each_time(client, user_factory):
    user_id = user_factory()
    for _ in range(2):
        resp = client.post("/api/subscription/upgrade", json={"userId": user_id})
        assert resp.status_code == 200
        assert resp.get_json()["subscription"] == "premium"

    logs = SubscriptionLog.query.filter_by(user_id=user_id).all()
    assert len(logs) == 2
    assert {log.plan for log in logs} == {"monthly"}


def test_logs_endpoint(client, user_factory):
    user_id = user_factory()
    client.post("/api/subscription/upgrade", json={"userId": user_id, "plan": "yearly"})

    resp = client.get(f"/api/subscription/{user_id}/logs")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["subscription"] == "premium"
    assert data["logs"][0]["action"] == "upgrade"
    assert data["logs"][0]["plan"] == "yearly"


def test_logs_for_unknown_user(client):
    resp = client.get("/api/subscription/404/logs")
    assert resp.status_code == 404


def test_invalid_plan_is_rejected(client, user_factory):
    user_id = user_factory()
    resp = client.post("/api/subscription/upgrade", json={"userId": user_id, "plan": "weekly"})
    assert resp.status_code == 400
    assert "plan" in resp.get_json()["errors"]
    assert db.session.get(User, user_id).subscription == "free"


def test_upgrade_unknown_user(client):
    resp = client.post("/api/subscription/upgrade", json={"userId": 12345})
    assert resp.status_code == 404


def test_upgraded_user_is_no_longer_metered(client, user_factory, fixed_today):
    user_id = user_factory(request_count=5)
    blocked = client.post("/api/usage/reserve", json={"userId": user_id})
    assert blocked.status_code == 429

    client.post("/api/subscription/upgrade", json={"userId": user_id})
    resp = client.post("/api/usage/reserve", json={"userId": user_id})
    assert resp.status_code == 200
    assert resp.get_json()["authorized"] is True
    assert resp.get_json()["limit"] is None


def test_service_rejects_unknown_plan(app_with_db, user_factory):
    user_id = user_factory()
    with pytest.raises(ValueError):
        subscription_service.upgrade(user_id, "lifetime")
    assert SubscriptionLog.query.count() == 0
