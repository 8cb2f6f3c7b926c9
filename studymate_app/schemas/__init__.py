"""Serialization / validation schemas (Marshmallow)."""

from .user_schema import (
    LoginSchema,
    UserSchema,
    UserRefSchema,
    UpgradeSchema,
)
from .planner_schema import (
    TaskSchema,
    TaskCreateSchema,
    TaskUpdateSchema,
    HistoryItemSchema,
    HistoryCreateSchema,
)
from .ai_schema import (
    AssignmentRequestSchema,
    ResearchRequestSchema,
    ExplainRequestSchema,
    AssignmentHelpSchema,
    ResearchAssistanceSchema,
    StudyExplanationSchema,
)

__all__ = [
    "LoginSchema",
    "UserSchema",
    "UserRefSchema",
    "UpgradeSchema",
    "TaskSchema",
    "TaskCreateSchema",
    "TaskUpdateSchema",
    "HistoryItemSchema",
    "HistoryCreateSchema",
    "AssignmentRequestSchema",
    "ResearchRequestSchema",
    "ExplainRequestSchema",
    "AssignmentHelpSchema",
    "ResearchAssistanceSchema",
    "StudyExplanationSchema",
]
