"""Pytest configuration for ensuring project modules resolve correctly."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from studymate_app import create_app
from studymate_app.extensions import db
from studymate_app.models import User
from studymate_app.services import quota_service
from studymate_app.utils.security import hash_password

TODAY = "2026-03-10"
YESTERDAY = "2026-03-09"
DEFAULT_PASSWORD = "StrongPass123!"


@pytest.fixture()
def app_with_db():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app_with_db):
    return app_with_db.test_client()


@pytest.fixture()
def fixed_today(monkeypatch):
    monkeypatch.setattr(quota_service, "today", lambda: TODAY)
    return TODAY


@pytest.fixture()
def user_factory(app_with_db):
    def _create(
        email: str = "student@example.com",
        password: str = DEFAULT_PASSWORD,
        subscription: str = "free",
        request_count: int = 0,
        last_request_date: str | None = TODAY,
        name: str | None = None,
    ) -> int:
        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name or email.split("@")[0],
            subscription=subscription,
            request_count=request_count,
            last_request_date=last_request_date,
        )
        db.session.add(user)
        db.session.commit()
        return user.id

    return _create
