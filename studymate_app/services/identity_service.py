"""Resolve login credentials or OAuth profiles into persisted users."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import current_app

from ..extensions import db
from ..models import OAUTH_CREDENTIAL_PREFIX, TIER_FREE, User
from ..utils import hash_password, verify_password
from . import quota_service

logger = logging.getLogger(__name__)


class InvalidCredentials(Exception):
    """Raised when a returning local user presents the wrong password."""


@dataclass(frozen=True)
class ProviderProfile:
    email: str
    name: str | None
    subject: str


def _default_name(email: str) -> str:
    return email.split("@", 1)[0]


def _new_user(email: str, credential: str, name: str | None) -> User:
    return User(
        email=email,
        password_hash=credential,
        name=name or _default_name(email),
        subscription=TIER_FREE,
        request_count=0,
        last_request_date=quota_service.today(),
    )


def find_by_email(email: str) -> User | None:
    return User.query.filter_by(email=email).first()


def resolve_or_create(email: str, password: str, name: str | None = None) -> tuple[User, bool]:
    """Return the account for `email`, creating it on first sight.

    Returning users must present their password unless AUTH_VERIFY_PASSWORD is
    switched off. Accounts created through Google sign-in have no password.
    """

    user = find_by_email(email)
    if user is not None:
        if current_app.config.get("AUTH_VERIFY_PASSWORD", True):
            if user.is_oauth_account or not verify_password(password, user.password_hash):
                raise InvalidCredentials("Invalid email or password")
        return user, False

    user = _new_user(email, hash_password(password), name)
    db.session.add(user)
    db.session.commit()
    logger.info("Created local account %s", user.id)
    return user, True


def resolve_or_create_from_provider(profile: ProviderProfile) -> tuple[User, bool]:
    user = find_by_email(profile.email)
    if user is not None:
        return user, False

    credential = f"{OAUTH_CREDENTIAL_PREFIX}{profile.subject}"
    user = _new_user(profile.email, credential, profile.name)
    db.session.add(user)
    db.session.commit()
    logger.info("Created Google account %s", user.id)
    return user, True
