"""Schemas for planner tasks and the interaction history."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from ..models import HISTORY_TYPES, PRIORITY_CHOICES


class TaskSchema(Schema):
    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(dump_only=True)
    name = fields.String()
    subject = fields.String()
    deadline = fields.Date()
    priority = fields.String()
    completed = fields.Boolean()
    created_at = fields.DateTime(dump_only=True)


class TaskCreateSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    subject = fields.String(required=True, validate=validate.Length(min=1, max=128))
    deadline = fields.Date(required=True)
    priority = fields.String(load_default="medium", validate=validate.OneOf(PRIORITY_CHOICES))

    class Meta:
        unknown = EXCLUDE


class TaskUpdateSchema(Schema):
    completed = fields.Boolean(required=True)

    class Meta:
        unknown = EXCLUDE


class HistoryItemSchema(Schema):
    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(dump_only=True)
    type = fields.String()
    query = fields.String(attribute="query_text")
    response = fields.String(allow_none=True)
    timestamp = fields.DateTime()


class HistoryCreateSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")
    type = fields.String(required=True, validate=validate.OneOf(HISTORY_TYPES))
    query = fields.String(required=True, validate=validate.Length(min=1))
    # clients send either a JSON string or the structured result itself
    response = fields.Raw(required=True, allow_none=True)

    class Meta:
        unknown = EXCLUDE
