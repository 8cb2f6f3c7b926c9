"""Daily usage quota endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError

from ..logging_config import bind_user
from ..schemas import UserRefSchema
from ..services import quota_service

usage_bp = Blueprint("usage_bp", __name__)

user_ref_schema = UserRefSchema()


@usage_bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


def limit_reached_response(reservation: quota_service.Reservation):
    return (
        jsonify(
            {
                "error": "daily_limit_reached",
                "message": "Daily AI request limit reached. Upgrade to continue.",
                "count": reservation.count,
                "limit": reservation.limit,
                "canRequest": False,
            }
        ),
        HTTPStatus.TOO_MANY_REQUESTS,
    )


@usage_bp.post("/check")
def check():
    user_id = user_ref_schema.load(request.get_json() or {})["user_id"]
    bind_user(user_id)
    return jsonify(quota_service.describe_usage(user_id).to_dict())


@usage_bp.post("/increment")
def increment():
    user_id = user_ref_schema.load(request.get_json() or {})["user_id"]
    bind_user(user_id)
    quota_service.record_request(user_id)
    return jsonify({"success": True})


@usage_bp.post("/reserve")
def reserve():
    user_id = user_ref_schema.load(request.get_json() or {})["user_id"]
    bind_user(user_id)
    reservation = quota_service.check_and_reserve(user_id)
    if not reservation.authorized:
        return limit_reached_response(reservation)
    return jsonify(reservation.to_dict())
