"""Study assistant prompts and structured-response parsing.

Each query kind has a fixed prompt template and a fixed response schema that is
sent to the provider. Responses that do not parse into the expected shape are
replaced by an empty dict; transport errors still propagate to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from flask import current_app
from marshmallow import Schema, ValidationError

from ..metrics import record_ai_request
from ..schemas import AssignmentHelpSchema, ResearchAssistanceSchema, StudyExplanationSchema
from .ai_client import get_ai_client

logger = logging.getLogger(__name__)

KIND_ASSIGNMENT = "assignment"
KIND_RESEARCH = "research"
KIND_EXPLAINER = "explainer"

_STRING = {"type": "STRING"}
_STRING_LIST = {"type": "ARRAY", "items": _STRING}

ASSIGNMENT_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "explanation": _STRING,
        "steps": _STRING_LIST,
        "example": _STRING,
    },
    "required": ["explanation", "steps", "example"],
}

RESEARCH_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "titles": _STRING_LIST,
        "questions": _STRING_LIST,
        "outline": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"chapter": _STRING, "description": _STRING},
            },
        },
        "methodology": _STRING,
    },
    "required": ["titles", "questions", "outline", "methodology"],
}

EXPLAINER_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {"explanation": _STRING},
    "required": ["explanation"],
}

DIFFICULTY_GUIDANCE = {
    "simple": "Use analogies and basic language.",
    "detailed": "Provide comprehensive coverage with examples.",
    "advanced": "Include technical details, current research, and complex implications.",
}


def assignment_prompt(subject: str, topic: str, instructions: str, grade_level: str) -> str:
    return (
        f"As an academic assistant for a {grade_level} student, help with the following assignment:\n"
        f"Subject: {subject}\n"
        f"Topic: {topic}\n"
        f"Instructions: {instructions}\n\n"
        "Provide:\n"
        "1. A clear explanation of the core concepts.\n"
        "2. A step-by-step solution or guide.\n"
        "3. An example answer or template."
    )


def research_prompt(topic: str) -> str:
    return (
        f"Provide research assistance for the topic: {topic}.\n"
        "Include:\n"
        "1. 3-5 suggested research titles.\n"
        "2. 3-5 key research questions.\n"
        "3. A detailed outline (chapter structure).\n"
        "4. Methodology suggestions."
    )


def explainer_prompt(topic: str, difficulty: str) -> str:
    guidance = DIFFICULTY_GUIDANCE.get(difficulty, DIFFICULTY_GUIDANCE["simple"])
    return (
        f'Explain the topic "{topic}" at a {difficulty} level.\n'
        f"{guidance}\n"
        'Return the full explanation as markdown text in the "explanation" field.'
    )


def parse_structured(text: str | None, schema: Schema) -> Dict[str, Any]:
    """Load `text` as JSON and validate it; any mismatch yields `{}`."""

    if not text or not text.strip():
        logger.warning("AI response was empty")
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("AI response is not valid JSON: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("AI response is not a JSON object")
        return {}
    try:
        return schema.load(data)
    except ValidationError as exc:
        logger.warning("AI response failed shape validation: %s", exc.messages)
        return {}


def _run(kind: str, prompt: str, response_schema: dict, shape: Schema) -> Dict[str, Any]:
    if not current_app.config.get("AI_ENABLE", True):
        record_ai_request(kind, "disabled")
        return {}
    try:
        text = get_ai_client().generate(prompt, response_schema=response_schema)
    except Exception:
        record_ai_request(kind, "error")
        raise
    result = parse_structured(text, shape)
    record_ai_request(kind, "ok" if result else "malformed")
    return result


def get_assignment_help(
    subject: str, topic: str, instructions: str, grade_level: str = "high school"
) -> Dict[str, Any]:
    return _run(
        KIND_ASSIGNMENT,
        assignment_prompt(subject, topic, instructions, grade_level),
        ASSIGNMENT_RESPONSE_SCHEMA,
        AssignmentHelpSchema(),
    )


def get_research_assistance(topic: str) -> Dict[str, Any]:
    return _run(
        KIND_RESEARCH,
        research_prompt(topic),
        RESEARCH_RESPONSE_SCHEMA,
        ResearchAssistanceSchema(),
    )


def get_study_explanation(topic: str, difficulty: str = "simple") -> Dict[str, Any]:
    return _run(
        KIND_EXPLAINER,
        explainer_prompt(topic, difficulty),
        EXPLAINER_RESPONSE_SCHEMA,
        StudyExplanationSchema(),
    )
