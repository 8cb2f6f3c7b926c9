"""studymate_app package – application factory and blueprint registration."""

from __future__ import annotations

import os
from http import HTTPStatus
from time import perf_counter

import click
from flask import Flask, g, jsonify, request, current_app
from flask_jwt_extended import JWTManager
from sqlalchemy import inspect, text, event
from werkzeug.exceptions import HTTPException

from config import resolve_config
from .blueprints import BLUEPRINTS
from .extensions import cors, db, jwt, migrate
from .logging_config import configure_logging, assign_request_id
from .metrics import record_request


def create_app(config_name: str | None = None) -> Flask:
    """Application factory used by both CLI and runtime servers."""

    app = Flask(__name__)
    _configure_app(app, config_name)
    configure_logging(app)
    _register_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_shellcontext(app)
    _register_cli(app)
    _register_bootstrap(app)
    _register_request_hooks(app)

    return app


def _configure_app(app: Flask, config_name: str | None) -> None:
    env_name = config_name or os.getenv("FLASK_CONFIG")
    config_obj = resolve_config(env_name)
    app.config.from_object(config_obj)


def _register_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    _configure_jwt(jwt)
    _configure_sqlite_engine(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )


def _register_blueprints(app: Flask) -> None:
    for blueprint, prefix in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=prefix)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if not request.path.startswith("/api/"):
            return exc.get_response()
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": str(exc)}), HTTPStatus.INTERNAL_SERVER_ERROR


def _register_shellcontext(app: Flask) -> None:
    # Lazy import inside function to avoid circular dependencies.
    from . import models  # noqa: F401

    @app.shell_context_processor
    def shell_context():
        return {"db": db}


def _configure_jwt(jwt_manager: JWTManager) -> None:
    from .models import User

    @jwt_manager.user_lookup_loader
    def user_lookup_callback(_jwt_header, jwt_data):
        identity = jwt_data.get("sub")
        if identity is None:
            return None
        try:
            identity_int = int(identity)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, identity_int)

    @jwt_manager.expired_token_loader
    def expired_token_callback(jwt_header, jwt_data):
        return jsonify({"message": "Token has expired"}), 401

    @jwt_manager.invalid_token_loader
    def invalid_token_callback(error_string):
        return jsonify({"message": "Invalid token", "error": error_string}), 401

    @jwt_manager.unauthorized_loader
    def missing_token_callback(error_string):
        return jsonify({"message": "Missing authorization token"}), 401


def _register_bootstrap(app: Flask) -> None:
    @app.before_request
    def ensure_schema():
        if app.config.get("_SCHEMA_READY"):
            return
        try:
            _ensure_schema(app)
            app.config["_SCHEMA_READY"] = True
        except Exception as exc:  # pragma: no cover - defensive logging
            app.logger.debug("Schema bootstrap skipped: %s", exc)
            app.config["_SCHEMA_READY"] = False


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def start_request():
        assign_request_id()
        g.request_started_at = perf_counter()

    @app.after_request
    def finalize(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers["X-Request-ID"] = request_id
        started = getattr(g, "request_started_at", None)
        latency = perf_counter() - started if started else 0.0
        endpoint = request.endpoint or request.path
        record_request(request.method, endpoint, response.status_code, latency)
        return response


def _configure_sqlite_engine(app: Flask) -> None:
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not uri.startswith("sqlite") or ":memory:" in uri:
        return
    busy_timeout_ms = int(app.config.get("SQLITE_BUSY_TIMEOUT_MS", 15000))

    with app.app_context():
        engine = db.engine

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):  # pragma: no cover
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA journal_mode=WAL;")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms};")
                cursor.execute("PRAGMA synchronous=NORMAL;")
            finally:
                cursor.close()


def _ensure_schema(app: Flask) -> None:
    with app.app_context():
        db.create_all()
        _ensure_usage_columns()


def _ensure_usage_columns() -> None:
    """Add the usage counter columns to a `users` table that predates them."""

    inspector = inspect(db.engine)
    if "users" not in inspector.get_table_names():
        return

    columns = {col["name"] for col in inspector.get_columns("users")}
    dialect = db.engine.dialect.name
    varchar_type = "VARCHAR(10)" if dialect != "sqlite" else "TEXT"

    statements: list[str] = []

    if "request_count" not in columns:
        statements.append(
            "ALTER TABLE users ADD COLUMN request_count INTEGER NOT NULL DEFAULT 0"
        )
    if "last_request_date" not in columns:
        statements.append(f"ALTER TABLE users ADD COLUMN last_request_date {varchar_type}")

    if not statements:
        return

    connection = db.engine.connect()
    trans = connection.begin()
    try:
        for statement in statements:
            connection.execute(text(statement))
        trans.commit()
    except Exception:  # pragma: no cover - defensive logging
        trans.rollback()
        current_app.logger.debug(
            "Skipping automatic usage column patch",
            exc_info=True,
        )
    finally:
        connection.close()


def _register_cli(app: Flask) -> None:
    @app.cli.command("seed-users")
    def seed_users() -> None:
        """Seed a free and a premium demo account for local testing."""

        from .services import identity_service, subscription_service

        created = []
        with app.app_context():
            _ensure_schema(app)
            password = app.config["SEED_PASSWORD"]

            free_user, was_created = identity_service.resolve_or_create(
                app.config["SEED_FREE_EMAIL"], password
            )
            if was_created:
                created.append(free_user.email)

            premium_user, was_created = identity_service.resolve_or_create(
                app.config["SEED_PREMIUM_EMAIL"], password
            )
            if was_created:
                subscription_service.upgrade(premium_user.id, "yearly")
                created.append(premium_user.email)

        if created:
            click.echo(f"Seeded accounts: {', '.join(created)}")
        else:
            click.echo("Seed users already exist; nothing to do.")

    @app.cli.group("usage")
    def usage_group():
        """Daily usage quota commands."""

    @usage_group.command("show")
    @click.option("--user-id", type=int, required=True, help="User ID to inspect.")
    def show_usage(user_id: int) -> None:
        """Print today's usage for a user."""

        from werkzeug.exceptions import NotFound

        from .services import quota_service

        with app.app_context():
            try:
                status = quota_service.describe_usage(user_id)
            except NotFound as exc:
                raise click.ClickException(f"User {user_id} not found.") from exc
        limit = "unlimited" if status.limit is None else status.limit
        click.echo(f"User {user_id}: {status.count}/{limit} used today, can_request={status.can_request}")

    @app.cli.group("subscription")
    def subscription_group():
        """Subscription management commands."""

    @subscription_group.command("upgrade")
    @click.option("--user-id", type=int, required=True, help="User ID to upgrade.")
    @click.option(
        "--plan",
        type=click.Choice(["monthly", "yearly"]),
        default="monthly",
        show_default=True,
    )
    def upgrade_command(user_id: int, plan: str) -> None:
        """Set a user's tier to premium."""

        from werkzeug.exceptions import NotFound

        from .services import subscription_service

        with app.app_context():
            try:
                user = subscription_service.upgrade(user_id, plan)
            except NotFound as exc:
                raise click.ClickException(f"User {user_id} not found.") from exc
            click.echo(f"User {user.id} is now {user.subscription} ({plan}).")
