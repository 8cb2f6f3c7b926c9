"""Authentication endpoints (local login, Google sign-in, me)."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from marshmallow import ValidationError

from ..extensions import db
from ..logging_config import bind_user
from ..models import User
from ..schemas import LoginSchema, UserSchema
from ..services import google_oauth, identity_service
from ..utils import HandoffError, generate_access_token, redeem_handoff

auth_bp = Blueprint("auth_bp", __name__)

login_schema = LoginSchema()
user_schema = UserSchema()


@auth_bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST


@auth_bp.get("/ping")
def ping():
    return jsonify({"module": "auth", "status": "ok"})


@auth_bp.post("/login")
def login():
    payload = login_schema.load(request.get_json() or {})
    try:
        user, _created = identity_service.resolve_or_create(
            payload["email"], payload["password"], payload.get("name")
        )
    except identity_service.InvalidCredentials:
        return (
            jsonify({"message": "Invalid email or password"}),
            HTTPStatus.UNAUTHORIZED,
        )
    bind_user(user.id)
    return jsonify({**user_schema.dump(user), "access_token": generate_access_token(user)})


@auth_bp.get("/me")
@jwt_required()
def me():
    user_identity = get_jwt_identity()
    user = None
    if user_identity is not None:
        user = db.session.get(User, int(user_identity))
    if user is None:
        return jsonify({"message": "User not found"}), HTTPStatus.NOT_FOUND
    return jsonify({"user": user_schema.dump(user)})


@auth_bp.get("/google/url")
def google_url():
    redirect_uri = request.args.get("redirect_uri") or None
    return jsonify({"url": google_oauth.build_authorization_url(redirect_uri)})


@auth_bp.get("/handoff/<token>")
def redeem(token: str):
    try:
        user_id = redeem_handoff(token)
    except HandoffError:
        return jsonify({"message": "Invalid or expired handoff token"}), HTTPStatus.UNAUTHORIZED
    user = db.session.get(User, user_id)
    if user is None:
        return jsonify({"message": "User not found"}), HTTPStatus.NOT_FOUND
    return jsonify({"user": user_schema.dump(user), "access_token": generate_access_token(user)})
