"""AI study-assistant endpoints gated by the daily usage quota."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError

from ..logging_config import bind_user
from ..schemas import AssignmentRequestSchema, ExplainRequestSchema, ResearchRequestSchema
from ..services import history_service, quota_service, study_assistant
from .usage_bp import limit_reached_response

ai_bp = Blueprint("ai_bp", __name__)

assignment_schema = AssignmentRequestSchema()
research_schema = ResearchRequestSchema()
explain_schema = ExplainRequestSchema()


@ai_bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


@ai_bp.get("/ping")
def ping():
    return jsonify({"module": "ai", "status": "ok"})


def _respond(user_id: int, kind: str, query: str, result: dict, stored_response, reservation):
    item = history_service.append(user_id, kind, query, stored_response)
    return jsonify({"result": result, "usage": reservation.to_dict(), "historyId": item.id})


@ai_bp.post("/assignment")
def assignment():
    payload = assignment_schema.load(request.get_json() or {})
    user_id = payload["user_id"]
    bind_user(user_id)
    reservation = quota_service.check_and_reserve(user_id)
    if not reservation.authorized:
        return limit_reached_response(reservation)
    result = study_assistant.get_assignment_help(
        subject=payload["subject"],
        topic=payload["topic"],
        instructions=payload["instructions"],
        grade_level=payload["grade_level"],
    )
    query = f"{payload['subject']}: {payload['topic']}"
    return _respond(user_id, study_assistant.KIND_ASSIGNMENT, query, result, result, reservation)


@ai_bp.post("/research")
def research():
    payload = research_schema.load(request.get_json() or {})
    user_id = payload["user_id"]
    bind_user(user_id)
    reservation = quota_service.check_and_reserve(user_id)
    if not reservation.authorized:
        return limit_reached_response(reservation)
    result = study_assistant.get_research_assistance(payload["topic"])
    return _respond(
        user_id, study_assistant.KIND_RESEARCH, payload["topic"], result, result, reservation
    )


@ai_bp.post("/explain")
def explain():
    payload = explain_schema.load(request.get_json() or {})
    user_id = payload["user_id"]
    bind_user(user_id)
    reservation = quota_service.check_and_reserve(user_id)
    if not reservation.authorized:
        return limit_reached_response(reservation)
    result = study_assistant.get_study_explanation(payload["topic"], payload["difficulty"])
    query = f"{payload['topic']} ({payload['difficulty']})"
    # explanations are stored as plain markdown text
    stored = result.get("explanation") if result else None
    return _respond(
        user_id, study_assistant.KIND_EXPLAINER, query, result, stored, reservation
    )
