"""Service layer (quota gate, subscriptions, identity, planner, history, AI)."""

from . import (
    ai_client,
    google_oauth,
    history_service,
    identity_service,
    planner_service,
    quota_service,
    study_assistant,
    subscription_service,
    usage_store,
)

__all__ = [
    "ai_client",
    "google_oauth",
    "history_service",
    "identity_service",
    "planner_service",
    "quota_service",
    "study_assistant",
    "subscription_service",
    "usage_store",
]
