"""Study planner models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

PRIORITY_CHOICES = ("low", "medium", "high")


def utcnow():
    return datetime.now(timezone.utc)


class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(128), nullable=False)
    deadline = db.Column(db.Date, nullable=False, index=True)
    priority = db.Column(db.String(16), nullable=False, default="medium")
    completed = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    user = db.relationship("User", back_populates="tasks")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Task id={self.id} user={self.user_id} deadline={self.deadline}>"
