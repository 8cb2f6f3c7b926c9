"""Interaction history endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError

from ..schemas import HistoryCreateSchema, HistoryItemSchema
from ..services import history_service

history_bp = Blueprint("history_bp", __name__)

items_schema = HistoryItemSchema(many=True)
create_schema = HistoryCreateSchema()


@history_bp.errorhandler(ValidationError)
def handle_validation(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


@history_bp.get("/<int:user_id>")
def list_history(user_id: int):
    return jsonify(items_schema.dump(history_service.recent(user_id)))


@history_bp.post("")
def append_history():
    payload = create_schema.load(request.get_json() or {})
    item = history_service.append(
        payload["user_id"], payload["type"], payload["query"], payload["response"]
    )
    return jsonify({"success": True, "id": item.id}), HTTPStatus.CREATED
