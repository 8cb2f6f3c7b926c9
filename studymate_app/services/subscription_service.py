"""Premium upgrades and the subscription audit log."""

from __future__ import annotations

import logging

from werkzeug.exceptions import NotFound

from ..extensions import db
from ..models import SubscriptionLog, TIER_PREMIUM, User

logger = logging.getLogger(__name__)

PLANS = ("monthly", "yearly")


def is_premium(user: User) -> bool:
    return user.subscription == TIER_PREMIUM


def upgrade(user_id: int, plan: str = "monthly") -> User:
    # No billing happens here; the plan label is only recorded in the log.
    if plan not in PLANS:
        raise ValueError(f"Unknown plan {plan}")
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    was_premium = is_premium(user)
    user.subscription = TIER_PREMIUM
    db.session.add(user)
    db.session.add(SubscriptionLog(user_id=user.id, action="upgrade", plan=plan))
    db.session.commit()
    if not was_premium:
        logger.info("User %s upgraded to premium (%s)", user.id, plan)
    return user


def get_subscription_logs(user_id: int, limit: int = 50) -> list[dict]:
    logs = (
        SubscriptionLog.query.filter_by(user_id=user_id)
        .order_by(SubscriptionLog.created_at.desc(), SubscriptionLog.id.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            "action": log.action,
            "plan": log.plan,
            "created_at": log.created_at.isoformat() if log.created_at else None,
        }
        for log in logs
    ]
