"""User domain models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

TIER_FREE = "free"
TIER_PREMIUM = "premium"
OAUTH_CREDENTIAL_PREFIX = "google_"


def utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    """Account identity plus its subscription tier and daily usage counter."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    # PBKDF2 hash for local accounts, `google_<sub>` marker for OAuth-created ones
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255))
    subscription = db.Column(db.String(16), nullable=False, default=TIER_FREE)
    request_count = db.Column(db.Integer, nullable=False, default=0)
    last_request_date = db.Column(db.String(10))  # YYYY-MM-DD
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    tasks = db.relationship("Task", back_populates="user", lazy="dynamic")
    history = db.relationship("HistoryItem", back_populates="user", lazy="dynamic")

    @property
    def is_premium(self) -> bool:
        return self.subscription == TIER_PREMIUM

    @property
    def is_oauth_account(self) -> bool:
        return (self.password_hash or "").startswith(OAUTH_CREDENTIAL_PREFIX)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.email} ({self.subscription})>"


class SubscriptionLog(db.Model):
    __tablename__ = "subscription_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    action = db.Column(db.String(32), nullable=False)
    plan = db.Column(db.String(32))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
