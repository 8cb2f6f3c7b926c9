"""Schemas for user-related payloads."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

TIER_CHOICES = ("free", "premium")
PLAN_CHOICES = ("monthly", "yearly")


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=1))
    name = fields.String(allow_none=True, validate=validate.Length(max=255))

    class Meta:
        unknown = EXCLUDE


class UserSchema(Schema):
    id = fields.Integer(dump_only=True)
    email = fields.Email(dump_only=True)
    name = fields.String(dump_only=True)
    subscription = fields.String(dump_only=True, validate=validate.OneOf(TIER_CHOICES))
    request_count = fields.Integer(dump_only=True)
    last_request_date = fields.String(dump_only=True, allow_none=True)
    created_at = fields.DateTime(dump_only=True)


class UserRefSchema(Schema):
    """Request body that only names the acting user."""

    user_id = fields.Integer(required=True, data_key="userId")

    class Meta:
        unknown = EXCLUDE


class UpgradeSchema(UserRefSchema):
    plan = fields.String(load_default="monthly", validate=validate.OneOf(PLAN_CHOICES))
