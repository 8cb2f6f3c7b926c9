"""Per-user study task planner."""

from __future__ import annotations

from datetime import date

from werkzeug.exceptions import NotFound

from ..extensions import db
from ..models import Task, User


def _require_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def list_tasks(user_id: int) -> list[Task]:
    _require_user(user_id)
    return (
        Task.query.filter_by(user_id=user_id)
        .order_by(Task.deadline.asc(), Task.id.asc())
        .all()
    )


def create_task(
    user_id: int, name: str, subject: str, deadline: date, priority: str = "medium"
) -> Task:
    _require_user(user_id)
    task = Task(
        user_id=user_id,
        name=name,
        subject=subject,
        deadline=deadline,
        priority=priority,
        completed=False,
    )
    db.session.add(task)
    db.session.commit()
    return task


def set_completed(task_id: int, completed: bool) -> Task:
    task = db.session.get(Task, task_id)
    if task is None:
        raise NotFound("Task not found")
    task.completed = bool(completed)
    db.session.commit()
    return task
