"""Tests for logging/metrics hardening."""

from __future__ import annotations


def test_metrics_endpoint(client):
    client.get("/api/auth/ping")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert b"studymate_requests_total" in resp.data


def test_request_id_header(client):
    resp = client.get("/api/auth/ping")
    assert resp.status_code == 200
    assert "X-Request-ID" in resp.headers


def test_request_id_is_echoed(client):
    resp = client.get("/api/auth/ping", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"


def test_quota_decisions_are_counted(client, user_factory, fixed_today):
    user_id = user_factory()
    client.post("/api/usage/reserve", json={"userId": user_id})
    resp = client.get("/metrics")
    assert b'studymate_quota_decisions_total{outcome="granted"}' in resp.data
