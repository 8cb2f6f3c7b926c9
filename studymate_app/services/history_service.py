"""Append-only interaction history."""

from __future__ import annotations

import json
from typing import Any

from flask import current_app
from werkzeug.exceptions import NotFound

from ..extensions import db
from ..models import HistoryItem, User


def _history_limit() -> int:
    return int(current_app.config.get("HISTORY_LIMIT", 20))


def _serialize(response: Any) -> str | None:
    if response is None or isinstance(response, str):
        return response
    return json.dumps(response, ensure_ascii=False)


def append(user_id: int, kind: str, query: str, response: Any) -> HistoryItem:
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found")
    item = HistoryItem(
        user_id=user_id,
        type=kind,
        query_text=query,
        response=_serialize(response),
    )
    db.session.add(item)
    db.session.commit()
    return item


def recent(user_id: int, limit: int | None = None) -> list[HistoryItem]:
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found")
    cap = _history_limit()
    limit = cap if limit is None else max(0, min(limit, cap))
    return (
        HistoryItem.query.filter_by(user_id=user_id)
        .order_by(HistoryItem.timestamp.desc(), HistoryItem.id.desc())
        .limit(limit)
        .all()
    )
