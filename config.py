"""Application configuration objects."""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from typing import Any, Type

from sqlalchemy.pool import NullPool, StaticPool


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class BaseConfig:
    """Shared defaults across all environments."""

    APP_NAME = "StudyMate"
    APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite+pysqlite:///studymate.db",
    )
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change_me")
    JWT_TOKEN_LOCATION = ("headers", "query_string")
    JWT_QUERY_STRING_NAME = "token"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_SEC", "43200"))
    )
    AUTH_VERIFY_PASSWORD = _flag("AUTH_VERIFY_PASSWORD", "true")
    FREE_DAILY_REQUEST_LIMIT = int(os.getenv("FREE_DAILY_REQUEST_LIMIT", "5"))
    HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "20"))
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("AI_API_KEY", "")
    AI_API_BASE = os.getenv(
        "AI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
    )
    AI_MODEL_NAME = os.getenv("AI_MODEL_NAME", "gemini-3-flash-preview")
    AI_ENABLE = _flag("AI_ENABLE", "true")
    AI_TEMPERATURE = float(os.getenv("AI_TEMPERATURE", "0.4"))
    AI_API_MAX_RETRIES = int(os.getenv("AI_API_MAX_RETRIES", "3"))
    AI_API_RETRY_BACKOFF = float(os.getenv("AI_API_RETRY_BACKOFF", "2.0"))
    AI_TIMEOUT_SECONDS = int(os.getenv("AI_TIMEOUT_SECONDS", "120"))
    AI_CONNECT_TIMEOUT_SEC = int(os.getenv("AI_CONNECT_TIMEOUT_SEC", "15"))
    AI_READ_TIMEOUT_SEC = int(
        os.getenv("AI_READ_TIMEOUT_SEC", str(AI_TIMEOUT_SECONDS))
    )
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_AUTH_URI = os.getenv(
        "GOOGLE_AUTH_URI", "https://accounts.google.com/o/oauth2/v2/auth"
    )
    GOOGLE_TOKEN_URI = os.getenv("GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token")
    GOOGLE_USERINFO_URI = os.getenv(
        "GOOGLE_USERINFO_URI", "https://www.googleapis.com/oauth2/v2/userinfo"
    )
    OAUTH_TIMEOUT_SEC = int(os.getenv("OAUTH_TIMEOUT_SEC", "15"))
    OAUTH_HANDOFF_SECRET = os.getenv("OAUTH_HANDOFF_SECRET") or JWT_SECRET_KEY
    OAUTH_HANDOFF_SALT = os.getenv("OAUTH_HANDOFF_SALT", "oauth-handoff")
    OAUTH_HANDOFF_TTL_SEC = int(os.getenv("OAUTH_HANDOFF_TTL_SEC", "300"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    JSON_SORT_KEYS = False
    SEED_FREE_EMAIL = os.getenv("SEED_FREE_EMAIL", "student@example.com")
    SEED_PREMIUM_EMAIL = os.getenv("SEED_PREMIUM_EMAIL", "premium@example.com")
    SEED_PASSWORD = os.getenv("SEED_PASSWORD", "StudentPass123!")
    SQLITE_TIMEOUT_SEC = int(os.getenv("SQLITE_TIMEOUT_SEC", "15"))
    SQLITE_BUSY_TIMEOUT_MS = int(os.getenv("SQLITE_BUSY_TIMEOUT_MS", "15000"))
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "poolclass": NullPool,
            "connect_args": {"timeout": SQLITE_TIMEOUT_SEC, "check_same_thread": False},
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {
            "pool_pre_ping": True,
            "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
            "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
            "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
        }


class DevConfig(BaseConfig):
    DEBUG = True


class ProdConfig(BaseConfig):
    DEBUG = False


class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    JWT_SECRET_KEY = "test-secret"
    OAUTH_HANDOFF_SECRET = "test-handoff-secret"
    GOOGLE_CLIENT_ID = "test-client-id"
    GOOGLE_CLIENT_SECRET = "test-client-secret"
    APP_URL = "http://testserver"
    AI_ENABLE = False
    AI_API_MAX_RETRIES = 1
    AI_API_RETRY_BACKOFF = 0.0


CONFIG_ALIASES: dict[str, Type[BaseConfig]] = {
    "dev": DevConfig,
    "development": DevConfig,
    "prod": ProdConfig,
    "production": ProdConfig,
    "test": TestConfig,
    "testing": TestConfig,
}


@lru_cache
def resolve_config(name_or_class: Any) -> Any:
    """Resolve config argument to the object expected by `app.config.from_object`."""

    if name_or_class is None:
        return DevConfig
    if isinstance(name_or_class, str):
        return CONFIG_ALIASES.get(name_or_class, name_or_class)
    return name_or_class
