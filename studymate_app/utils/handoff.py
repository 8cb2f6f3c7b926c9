"""Short-lived signed tokens that carry an OAuth result back to the main window."""

from __future__ import annotations

import secrets
from typing import Any, Dict

from flask import current_app
from itsdangerous import BadSignature, URLSafeTimedSerializer


class HandoffError(Exception):
    """Raised when a handoff token is forged, malformed or expired."""


def _serializer() -> URLSafeTimedSerializer:
    cfg = current_app.config
    secret = cfg.get("OAUTH_HANDOFF_SECRET") or cfg.get("JWT_SECRET_KEY")
    return URLSafeTimedSerializer(secret_key=secret, salt=cfg.get("OAUTH_HANDOFF_SALT", "oauth-handoff"))


def issue_handoff(user_id: int) -> str:
    payload: Dict[str, Any] = {"uid": user_id, "nonce": secrets.token_hex(8)}
    return _serializer().dumps(payload)


def redeem_handoff(token: str) -> int:
    """Return the user id sealed in `token`."""

    max_age = int(current_app.config.get("OAUTH_HANDOFF_TTL_SEC", 300))
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except BadSignature as exc:  # SignatureExpired is a subclass
        raise HandoffError(str(exc)) from exc
    try:
        return int(payload["uid"])
    except (KeyError, TypeError, ValueError) as exc:
        raise HandoffError("Malformed handoff payload") from exc
