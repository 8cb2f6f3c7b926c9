"""Google OAuth 2.0 authorization-code flow."""

from __future__ import annotations

from urllib.parse import urlencode

import requests
from flask import current_app

from .identity_service import ProviderProfile

SCOPES = (
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
)


class OAuthError(RuntimeError):
    pass


def _client_config() -> tuple[str, str]:
    cfg = current_app.config
    client_id = cfg.get("GOOGLE_CLIENT_ID", "")
    client_secret = cfg.get("GOOGLE_CLIENT_SECRET", "")
    if not client_id or not client_secret:
        raise OAuthError("GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET are not configured")
    return client_id, client_secret


def callback_url() -> str:
    return f"{current_app.config.get('APP_URL', '').rstrip('/')}/auth/callback"


def build_authorization_url(redirect_uri: str | None = None) -> str:
    client_id, _ = _client_config()
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri or callback_url(),
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "access_type": "offline",
    }
    return f"{current_app.config['GOOGLE_AUTH_URI']}?{urlencode(params)}"


def exchange_code(code: str, redirect_uri: str | None = None) -> ProviderProfile:
    """Trade an authorization code for the signed-in Google profile."""

    client_id, client_secret = _client_config()
    cfg = current_app.config
    timeout = int(cfg.get("OAUTH_TIMEOUT_SEC", 15))
    try:
        token_resp = requests.post(
            cfg["GOOGLE_TOKEN_URI"],
            data={
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri or callback_url(),
                "grant_type": "authorization_code",
            },
            timeout=timeout,
        )
        token_resp.raise_for_status()
        access_token = token_resp.json().get("access_token")
        if not access_token:
            raise OAuthError("Token endpoint returned no access_token")

        info_resp = requests.get(
            cfg["GOOGLE_USERINFO_URI"],
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=timeout,
        )
        info_resp.raise_for_status()
        info = info_resp.json()
    except requests.RequestException as exc:
        raise OAuthError(f"Google token exchange failed: {exc}") from exc

    email = info.get("email")
    subject = info.get("id") or info.get("sub")
    if not email or not subject:
        raise OAuthError("Google profile is missing email or id")
    return ProviderProfile(email=email, name=info.get("name"), subject=str(subject))
