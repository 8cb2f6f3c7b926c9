"""Tests for local login, Google sign-in and the OAuth handoff."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from studymate_app.extensions import db
from studymate_app.models import User
from studymate_app.services import google_oauth
from studymate_app.services.identity_service import ProviderProfile
from studymate_app.utils import issue_handoff

from conftest import DEFAULT_PASSWORD, TODAY


def test_login_creates_free_user_with_defaults(client, app_with_db, fixed_today):
    resp = client.post(
        "/api/auth/login",
        json={"email": "new.student@example.com", "password": DEFAULT_PASSWORD},
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["email"] == "new.student@example.com"
    assert data["name"] == "new.student"
    assert data["subscription"] == "free"
    assert data["request_count"] == 0
    assert data["last_request_date"] == TODAY
    assert "access_token" in data
    assert "password_hash" not in data

    user = User.query.filter_by(email="new.student@example.com").first()
    assert user.password_hash != DEFAULT_PASSWORD


def test_login_uses_supplied_name(client):
    resp = client.post(
        "/api/auth/login",
        json={"email": "named@example.com", "password": DEFAULT_PASSWORD, "name": "Ada"},
    )
    assert resp.get_json()["name"] == "Ada"


def test_returning_user_with_correct_password(client, user_factory):
    user_id = user_factory(email="back@example.com")
    resp = client.post(
        "/api/auth/login", json={"email": "back@example.com", "password": DEFAULT_PASSWORD}
    )
    assert resp.status_code == 200
    assert resp.get_json()["id"] == user_id
    assert User.query.filter_by(email="back@example.com").count() == 1


def test_returning_user_with_wrong_password_is_rejected(client, user_factory):
    user_factory(email="back@example.com")
    resp = client.post(
        "/api/auth/login", json={"email": "back@example.com", "password": "wrong-password"}
    )
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid email or password"


def test_password_check_can_be_disabled(client, app_with_db, user_factory):
    app_with_db.config["AUTH_VERIFY_PASSWORD"] = False
    user_id = user_factory(email="legacy@example.com")
    resp = client.post(
        "/api/auth/login", json={"email": "legacy@example.com", "password": "anything"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["id"] == user_id


def test_google_account_cannot_use_password_login(client, app_with_db):
    db.session.add(
        User(email="g@example.com", password_hash="google_123", name="G", subscription="free")
    )
    db.session.commit()
    resp = client.post("/api/auth/login", json={"email": "g@example.com", "password": "google_123"})
    assert resp.status_code == 401


def test_login_requires_email_and_password(client):
    resp = client.post("/api/auth/login", json={"email": "x@example.com"})
    assert resp.status_code == 400
    assert "password" in resp.get_json()["errors"]


def test_me_returns_user_for_token(client):
    login = client.post(
        "/api/auth/login", json={"email": "me@example.com", "password": DEFAULT_PASSWORD}
    ).get_json()
    resp = client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {login['access_token']}"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == "me@example.com"


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401


def test_google_url_contains_client_and_redirect(client):
    resp = client.get(
        "/api/auth/google/url", query_string={"redirect_uri": "http://localhost:3000/auth/callback"}
    )
    assert resp.status_code == 200
    url = urlparse(resp.get_json()["url"])
    params = parse_qs(url.query)
    assert url.netloc == "accounts.google.com"
    assert params["client_id"] == ["test-client-id"]
    assert params["redirect_uri"] == ["http://localhost:3000/auth/callback"]
    assert params["access_type"] == ["offline"]
    assert "userinfo.email" in params["scope"][0]


def test_google_url_fails_without_client_config(client, app_with_db):
    app_with_db.config["GOOGLE_CLIENT_ID"] = ""
    resp = client.get("/api/auth/google/url")
    assert resp.status_code == 500
    assert "GOOGLE_CLIENT_ID" in resp.get_json()["error"]


def _fake_exchange(profile):
    def _exchange(code, redirect_uri=None):
        assert code == "auth-code"
        return profile

    return _exchange


def _handoff_from_page(body: str) -> str:
    match = re.search(r'"handoff":\s*"([^"]+)"', body)
    assert match, body
    return match.group(1)


def test_callback_creates_user_and_handoff_redeems(client, monkeypatch, fixed_today):
    profile = ProviderProfile(email="gina@example.com", name="Gina", subject="998877")
    monkeypatch.setattr(google_oauth, "exchange_code", _fake_exchange(profile))

    resp = client.get("/auth/callback", query_string={"code": "auth-code"})
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "OAUTH_AUTH_SUCCESS" in body

    user = User.query.filter_by(email="gina@example.com").first()
    assert user.password_hash == "google_998877"
    assert user.subscription == "free"
    assert user.request_count == 0
    assert user.last_request_date == TODAY

    redeemed = client.get(f"/api/auth/handoff/{_handoff_from_page(body)}")
    assert redeemed.status_code == 200
    assert redeemed.get_json()["user"]["id"] == user.id
    assert "access_token" in redeemed.get_json()


def test_callback_posts_only_to_app_origin(client, app_with_db, monkeypatch):
    app_with_db.config["APP_URL"] = "https://studymate.example/app"
    profile = ProviderProfile(email="o@example.com", name="O", subject="5")
    monkeypatch.setattr(google_oauth, "exchange_code", _fake_exchange(profile))

    body = client.get("/auth/callback", query_string={"code": "auth-code"}).get_data(as_text=True)
    assert 'var appOrigin = "https://studymate.example";' in body
    assert "window.opener.postMessage(message, appOrigin)" in body
    assert '"*"' not in body
    assert 'appOrigin + "/?handoff="' in body


def test_expired_handoff_is_rejected(client, app_with_db, user_factory):
    user_id = user_factory()
    token = issue_handoff(user_id)
    app_with_db.config["OAUTH_HANDOFF_TTL_SEC"] = -1
    resp = client.get(f"/api/auth/handoff/{token}")
    assert resp.status_code == 401


def test_callback_reuses_existing_account(client, monkeypatch, user_factory):
    user_id = user_factory(email="known@example.com")
    profile = ProviderProfile(email="known@example.com", name="Known", subject="1")
    monkeypatch.setattr(google_oauth, "exchange_code", _fake_exchange(profile))

    resp = client.get("/auth/callback", query_string={"code": "auth-code"})
    assert resp.status_code == 200
    assert User.query.filter_by(email="known@example.com").count() == 1
    assert not db.session.get(User, user_id).is_oauth_account


def test_callback_failure_reports_message(client, monkeypatch):
    def _boom(code, redirect_uri=None):
        raise google_oauth.OAuthError("token exchange rejected")

    monkeypatch.setattr(google_oauth, "exchange_code", _boom)
    resp = client.get("/auth/callback", query_string={"code": "bad"})
    assert resp.status_code == 500
    assert "Authentication failed: token exchange rejected" in resp.get_data(as_text=True)


def test_forged_handoff_is_rejected(client):
    resp = client.get("/api/auth/handoff/not-a-real-token")
    assert resp.status_code == 401


def test_exchange_code_reads_profile(app_with_db, monkeypatch):
    calls = {}

    class _Resp:
        def __init__(self, payload):
            self._payload = payload

        def raise_for_status(self):
            return None

        def json(self):
            return self._payload

    def _post(url, data=None, timeout=None):
        calls["token"] = (url, data)
        return _Resp({"access_token": "tok"})

    def _get(url, headers=None, timeout=None):
        calls["userinfo"] = headers
        return _Resp({"email": "p@example.com", "name": "P", "id": "42"})

    monkeypatch.setattr(google_oauth.requests, "post", _post)
    monkeypatch.setattr(google_oauth.requests, "get", _get)

    profile = google_oauth.exchange_code("the-code")
    assert profile == ProviderProfile(email="p@example.com", name="P", subject="42")
    assert calls["token"][1]["grant_type"] == "authorization_code"
    assert calls["token"][1]["redirect_uri"] == "http://testserver/auth/callback"
    assert calls["userinfo"]["Authorization"] == "Bearer tok"
