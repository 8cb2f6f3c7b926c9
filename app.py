"""StudyMate API entry point.

Loads environment variables, instantiates the Flask app via the studymate_app
factory, and exposes `app` for `flask --app app run`.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# `.env` must be loaded before `create_app` reads configuration.
PROJECT_ROOT = Path(__file__).resolve().parent
if os.getenv("FLASK_SKIP_DOTENV") not in {"1", "true", "True"}:
    try:
        load_dotenv(PROJECT_ROOT / ".env")
    except PermissionError:
        pass

from studymate_app import create_app  # noqa: E402  (import after load_dotenv)

app = create_app()


def _resolve_port() -> int:
    """Return the port that should be used when running via `python app.py`."""

    return int(os.getenv("PORT", os.getenv("FLASK_RUN_PORT", 3000)))


if __name__ == "__main__":  # pragma: no cover
    app.run(
        debug=app.config.get("DEBUG", False),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_resolve_port(),
    )
