"""Utility helpers (password hashing, JWT and OAuth handoff tokens)."""

from .security import generate_access_token, hash_password, verify_password
from .handoff import HandoffError, issue_handoff, redeem_handoff

__all__ = [
    "generate_access_token",
    "hash_password",
    "verify_password",
    "HandoffError",
    "issue_handoff",
    "redeem_handoff",
]
