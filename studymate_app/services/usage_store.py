"""Storage access for the daily usage counter.

The quota gate talks to this interface instead of reaching into the ORM so that
tests can substitute an in-memory implementation. `SqlUsageStore` is the
production implementation; every mutation is a single UPDATE statement.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from sqlalchemy import case, or_, update

from ..extensions import db
from ..models import TIER_PREMIUM, User


@dataclass(frozen=True)
class UsageRecord:
    user_id: int
    subscription: str
    request_count: int
    last_request_date: str | None

    @property
    def is_premium(self) -> bool:
        return self.subscription == TIER_PREMIUM


class SqlUsageStore:
    def get(self, user_id: int) -> UsageRecord | None:
        user = db.session.get(User, user_id)
        if user is None:
            return None
        return UsageRecord(
            user_id=user.id,
            subscription=user.subscription,
            request_count=user.request_count or 0,
            last_request_date=user.last_request_date,
        )

    def reset(self, user_id: int, today: str) -> None:
        self._execute(
            update(User)
            .where(User.id == user_id)
            .values(request_count=0, last_request_date=today)
        )

    def reserve(self, user_id: int, today: str, limit: int) -> bool:
        """Consume one request for `today` if the free allowance permits it.

        A stale date counts as zero used, so the row is rewritten to 1 for today.
        Returns False without touching the row when the allowance is exhausted or
        the user is premium.
        """

        stmt = (
            update(User)
            .where(User.id == user_id, User.subscription != TIER_PREMIUM)
            .where(
                or_(
                    User.last_request_date.is_(None),
                    User.last_request_date != today,
                    User.request_count < limit,
                )
            )
            .values(
                request_count=case(
                    (User.last_request_date == today, User.request_count + 1),
                    else_=1,
                ),
                last_request_date=today,
            )
        )
        return self._execute(stmt) == 1

    def increment(self, user_id: int, today: str) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.subscription != TIER_PREMIUM)
            .values(
                request_count=case(
                    (User.last_request_date == today, User.request_count + 1),
                    else_=1,
                ),
                last_request_date=today,
            )
        )
        return self._execute(stmt) == 1

    def _execute(self, stmt) -> int:
        try:
            result = db.session.execute(stmt.execution_options(synchronize_session=False))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return result.rowcount


def get_usage_store():
    app = current_app
    store = app.extensions.get("usage_store")
    if store is None:
        store = SqlUsageStore()
        app.extensions["usage_store"] = store
    return store
