"""REST API blueprints (auth, usage, subscription, planner, history, AI)."""

from __future__ import annotations

from .ai_bp import ai_bp
from .auth_bp import auth_bp
from .history_bp import history_bp
from .metrics_bp import metrics_bp
from .oauth_bp import oauth_bp
from .subscription_bp import subscription_bp
from .tasks_bp import tasks_bp
from .usage_bp import usage_bp

BLUEPRINTS = (
    (auth_bp, "/api/auth"),
    (usage_bp, "/api/usage"),
    (subscription_bp, "/api/subscription"),
    (tasks_bp, "/api/tasks"),
    (history_bp, "/api/history"),
    (ai_bp, "/api/ai"),
    (oauth_bp, ""),
    (metrics_bp, ""),
)

__all__ = [
    "BLUEPRINTS",
    "ai_bp",
    "auth_bp",
    "history_bp",
    "metrics_bp",
    "oauth_bp",
    "subscription_bp",
    "tasks_bp",
    "usage_bp",
]
