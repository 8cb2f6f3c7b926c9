"""Subscription tier endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import NotFound

from ..extensions import db
from ..logging_config import bind_user
from ..models import User
from ..schemas import UpgradeSchema, UserSchema
from ..services import subscription_service

subscription_bp = Blueprint("subscription_bp", __name__)

upgrade_schema = UpgradeSchema()
user_schema = UserSchema()


@subscription_bp.errorhandler(ValidationError)
def handle_validation(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


@subscription_bp.post("/upgrade")
def upgrade():
    payload = upgrade_schema.load(request.get_json() or {})
    bind_user(payload["user_id"])
    user = subscription_service.upgrade(payload["user_id"], payload["plan"])
    return jsonify(user_schema.dump(user))


@subscription_bp.get("/<int:user_id>/logs")
def logs(user_id: int):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return jsonify(
        {
            "subscription": user.subscription,
            "logs": subscription_service.get_subscription_logs(user_id),
        }
    )
