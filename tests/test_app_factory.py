"""Smoke tests for the Flask application factory."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text

from studymate_app import create_app, _ensure_usage_columns
from studymate_app.extensions import db


@pytest.fixture(scope="module")
def app():
    app = create_app("test")
    yield app


def test_app_creation(app):
    assert app is not None
    assert app.config["TESTING"] is True
    assert app.config["FREE_DAILY_REQUEST_LIMIT"] == 5


@pytest.mark.parametrize("endpoint", ["/api/auth/ping", "/api/ai/ping"])
def test_ping_endpoints(app, endpoint):
    client = app.test_client()
    response = client.get(endpoint)
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"


def test_unknown_api_route_returns_json_404(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_usage_columns_added_to_legacy_users_table(app_with_db):
    db.drop_all()
    with db.engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT UNIQUE, "
                "password_hash TEXT, name TEXT, subscription TEXT DEFAULT 'free')"
            )
        )

    _ensure_usage_columns()
    _ensure_usage_columns()

    columns = {col["name"] for col in inspect(db.engine).get_columns("users")}
    assert {"request_count", "last_request_date"} <= columns

    with db.engine.begin() as connection:
        connection.execute(text("DROP TABLE users"))
