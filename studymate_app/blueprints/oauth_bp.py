"""OAuth redirect target rendered inside the sign-in popup."""

from __future__ import annotations

import logging
from http import HTTPStatus
from urllib.parse import urlparse

from flask import Blueprint, current_app, render_template_string, request

from ..schemas import UserSchema
from ..services import google_oauth, identity_service
from ..utils import issue_handoff

logger = logging.getLogger(__name__)

oauth_bp = Blueprint("oauth_bp", __name__)

user_schema = UserSchema()

# targetOrigin is pinned to APP_URL's origin
CALLBACK_PAGE = """<!doctype html>
<html>
  <body>
    <script>
      (function () {
        var message = {{ message|tojson }};
        var appOrigin = {{ app_origin|tojson }};
        if (window.opener) {
          window.opener.postMessage(message, appOrigin);
          window.close();
        } else {
          window.location.href = appOrigin + "/?handoff=" + encodeURIComponent(message.handoff);
        }
      })();
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""


def app_origin() -> str:
    parsed = urlparse(current_app.config.get("APP_URL", ""))
    if not parsed.scheme or not parsed.netloc:
        raise RuntimeError("APP_URL must be an absolute URL such as https://studymate.example")
    return f"{parsed.scheme}://{parsed.netloc}"


@oauth_bp.get("/auth/callback")
def callback():
    code = request.args.get("code")
    if not code:
        return "Authentication failed: missing authorization code", HTTPStatus.BAD_REQUEST
    try:
        profile = google_oauth.exchange_code(code)
        user, _created = identity_service.resolve_or_create_from_provider(profile)
    except Exception as exc:
        logger.exception("Google sign-in failed")
        return f"Authentication failed: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR

    message = {
        "type": "OAUTH_AUTH_SUCCESS",
        "user": user_schema.dump(user),
        "handoff": issue_handoff(user.id),
    }
    return render_template_string(CALLBACK_PAGE, message=message, app_origin=app_origin())
