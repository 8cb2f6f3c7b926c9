"""Structured JSON logging with per-request context."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any
from uuid import uuid4

from flask import g, has_request_context, request

_CONTEXT_FIELDS = ("request_id", "path", "method", "user_id")


class RequestContextFilter(logging.Filter):
    """Stamp every record with the request id, route and acting user."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.request_id = getattr(g, "request_id", "n/a")
            record.path = request.path
            record.method = request.method
            record.user_id = getattr(g, "acting_user_id", None) or "-"
        else:
            for field in _CONTEXT_FIELDS:
                setattr(record, field, "-")
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        for field in _CONTEXT_FIELDS:
            base[field] = getattr(record, field, "-")
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def configure_logging(app) -> None:
    level = app.config.get("LOG_LEVEL", "INFO").upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    # werkzeug's access log duplicates the request metrics
    logging.getLogger("werkzeug").setLevel(max(logging.getLevelName(level), logging.WARNING))


def assign_request_id() -> str:
    req_id = request.headers.get("X-Request-ID") if has_request_context() else None
    if not req_id:
        req_id = uuid4().hex
    g.request_id = req_id
    return req_id


def bind_user(user_id: int | None) -> None:
    """Attach the acting user id to subsequent log records of this request."""

    if has_request_context() and user_id is not None:
        g.acting_user_id = user_id
