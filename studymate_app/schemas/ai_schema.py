"""Schemas for AI query requests and the structured provider responses."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

GRADE_LEVELS = ("elementary", "high school", "college", "graduate")
DIFFICULTIES = ("simple", "detailed", "advanced")


class AssignmentRequestSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")
    subject = fields.String(required=True, validate=validate.Length(min=1))
    topic = fields.String(required=True, validate=validate.Length(min=1))
    instructions = fields.String(required=True, validate=validate.Length(min=1))
    grade_level = fields.String(
        data_key="gradeLevel", load_default="high school", validate=validate.OneOf(GRADE_LEVELS)
    )

    class Meta:
        unknown = EXCLUDE


class ResearchRequestSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")
    topic = fields.String(required=True, validate=validate.Length(min=1))

    class Meta:
        unknown = EXCLUDE


class ExplainRequestSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")
    topic = fields.String(required=True, validate=validate.Length(min=1))
    difficulty = fields.String(load_default="simple", validate=validate.OneOf(DIFFICULTIES))

    class Meta:
        unknown = EXCLUDE


# Shapes the provider is asked to return. Extra keys are dropped.


class AssignmentHelpSchema(Schema):
    explanation = fields.String(required=True)
    steps = fields.List(fields.String(), required=True)
    example = fields.String(required=True)

    class Meta:
        unknown = EXCLUDE


class OutlineEntrySchema(Schema):
    chapter = fields.String()
    description = fields.String()

    class Meta:
        unknown = EXCLUDE


class ResearchAssistanceSchema(Schema):
    titles = fields.List(fields.String(), required=True)
    questions = fields.List(fields.String(), required=True)
    outline = fields.List(fields.Nested(OutlineEntrySchema), required=True)
    methodology = fields.String(required=True)

    class Meta:
        unknown = EXCLUDE


class StudyExplanationSchema(Schema):
    explanation = fields.String(required=True)

    class Meta:
        unknown = EXCLUDE
