"""Database models package."""

from .user import User, SubscriptionLog, TIER_FREE, TIER_PREMIUM, OAUTH_CREDENTIAL_PREFIX
from .planner import Task, PRIORITY_CHOICES
from .history import HistoryItem, HISTORY_TYPES

__all__ = [
    "User",
    "SubscriptionLog",
    "Task",
    "HistoryItem",
    "TIER_FREE",
    "TIER_PREMIUM",
    "OAUTH_CREDENTIAL_PREFIX",
    "PRIORITY_CHOICES",
    "HISTORY_TYPES",
]
