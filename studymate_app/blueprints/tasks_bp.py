"""Study planner task endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError

from ..schemas import TaskCreateSchema, TaskSchema, TaskUpdateSchema
from ..services import planner_service

tasks_bp = Blueprint("tasks_bp", __name__)

task_schema = TaskSchema()
tasks_schema = TaskSchema(many=True)
create_schema = TaskCreateSchema()
update_schema = TaskUpdateSchema()


@tasks_bp.errorhandler(ValidationError)
def handle_validation(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


@tasks_bp.get("/<int:user_id>")
def list_tasks(user_id: int):
    return jsonify(tasks_schema.dump(planner_service.list_tasks(user_id)))


@tasks_bp.post("")
def create_task():
    payload = create_schema.load(request.get_json() or {})
    task = planner_service.create_task(
        payload["user_id"],
        payload["name"],
        payload["subject"],
        payload["deadline"],
        payload["priority"],
    )
    return jsonify({"id": task.id, "task": task_schema.dump(task)}), HTTPStatus.CREATED


@tasks_bp.patch("/<int:task_id>")
def toggle_task(task_id: int):
    payload = update_schema.load(request.get_json() or {})
    task = planner_service.set_completed(task_id, payload["completed"])
    return jsonify({"success": True, "task": task_schema.dump(task)})
