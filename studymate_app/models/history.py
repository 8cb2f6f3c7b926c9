"""Append-only log of AI interactions."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

HISTORY_TYPES = ("assignment", "research", "explainer")


def utcnow():
    return datetime.now(timezone.utc)


class HistoryItem(db.Model):
    __tablename__ = "history"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(db.String(32), nullable=False)
    # "query" would shadow Model.query
    query_text = db.Column("query", db.Text, nullable=False)
    response = db.Column(db.Text)
    timestamp = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    user = db.relationship("User", back_populates="history")
