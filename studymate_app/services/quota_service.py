"""Daily usage quota gate for AI requests.

Free-tier users get `FREE_DAILY_REQUEST_LIMIT` AI requests per UTC calendar day;
premium users are never metered. The stored counter only counts for the day in
`last_request_date`: any other date means zero requests used today.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app
from werkzeug.exceptions import NotFound

from ..metrics import record_quota_decision
from .usage_store import UsageRecord, get_usage_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageStatus:
    count: int
    limit: int | None
    can_request: bool

    def to_dict(self) -> dict:
        return {"count": self.count, "limit": self.limit, "canRequest": self.can_request}


@dataclass(frozen=True)
class Reservation:
    authorized: bool
    count: int
    limit: int | None

    def to_dict(self) -> dict:
        return {"authorized": self.authorized, "count": self.count, "limit": self.limit}


def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def daily_limit() -> int:
    return int(current_app.config.get("FREE_DAILY_REQUEST_LIMIT", 5))


def _load(store, user_id: int) -> UsageRecord:
    record = store.get(user_id)
    if record is None:
        raise NotFound("User not found")
    return record


def _effective_count(record: UsageRecord, day: str) -> int:
    if record.last_request_date != day:
        return 0
    return record.request_count


def describe_usage(user_id: int, store=None) -> UsageStatus:
    """Report today's usage without consuming a request.

    A stale counter on a free account is reset in storage before evaluating.
    """

    store = store or get_usage_store()
    record = _load(store, user_id)
    day = today()
    if record.is_premium:
        return UsageStatus(count=_effective_count(record, day), limit=None, can_request=True)

    if record.last_request_date != day:
        store.reset(user_id, day)
        count = 0
    else:
        count = record.request_count
    limit = daily_limit()
    return UsageStatus(count=count, limit=limit, can_request=count < limit)


def record_request(user_id: int, store=None) -> None:
    """Count one consumed request for today without checking the allowance."""

    store = store or get_usage_store()
    _load(store, user_id)
    store.increment(user_id, today())


def check_and_reserve(user_id: int, store=None) -> Reservation:
    """Authorize one AI request and consume it in the same storage operation."""

    store = store or get_usage_store()
    record = _load(store, user_id)
    day = today()

    if record.is_premium:
        record_quota_decision("premium")
        return Reservation(authorized=True, count=_effective_count(record, day), limit=None)

    limit = daily_limit()
    if limit <= 0:
        granted = False
        if record.last_request_date != day:
            store.reset(user_id, day)
    else:
        granted = store.reserve(user_id, day, limit)

    count = _effective_count(_load(store, user_id), day)
    record_quota_decision("granted" if granted else "denied")
    if granted:
        logger.info("Quota granted for user %s (%s/%s)", user_id, count, limit)
    else:
        logger.info("Quota denied for user %s (%s/%s)", user_id, count, limit)
    return Reservation(authorized=granted, count=count, limit=limit)
