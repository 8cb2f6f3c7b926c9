"""Simple AI client for calling the Gemini generateContent REST API."""

from __future__ import annotations

from dataclasses import dataclass
import time

import requests
from flask import current_app


class AIClientError(RuntimeError):
    """Raised when the provider answers without usable content."""


@dataclass
class AIClient:
    api_key: str
    api_base: str
    default_model: str

    def generate(
        self,
        prompt: str,
        *,
        response_schema: dict | None = None,
        model: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send one prompt and return the text of the first candidate."""

        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured")

        app = current_app
        generation_config: dict = {
            "temperature": app.config.get("AI_TEMPERATURE", 0.4) if temperature is None else temperature,
        }
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        raw = self._post(f"models/{model or self.default_model}:generateContent", payload)
        return _first_candidate_text(raw)

    def _post(self, path: str, payload: dict) -> dict:
        app = current_app
        connect_timeout = app.config.get("AI_CONNECT_TIMEOUT_SEC", 15)
        read_timeout = app.config.get("AI_READ_TIMEOUT_SEC", 60)
        max_retries = max(1, int(app.config.get("AI_API_MAX_RETRIES", 3)))
        backoff = float(app.config.get("AI_API_RETRY_BACKOFF", 2.0))

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        attempt = 0
        while True:
            attempt += 1
            try:
                response = requests.post(
                    f"{self.api_base.rstrip('/')}/{path}",
                    headers=headers,
                    json=payload,
                    timeout=(connect_timeout, read_timeout),
                )
                if response.status_code >= 400:
                    app.logger.warning(
                        "AI provider HTTP error %s: %s", response.status_code, response.text[:500]
                    )
                response.raise_for_status()
                return response.json()
            except requests.RequestException as exc:
                if attempt >= max_retries:
                    raise
                delay = backoff * attempt
                app.logger.warning(
                    "AI client call failed (attempt %s/%s): %s. Retrying in %.1fs",
                    attempt,
                    max_retries,
                    exc,
                    delay,
                )
                time.sleep(delay)


def _first_candidate_text(raw: dict) -> str:
    candidates = raw.get("candidates") if isinstance(raw, dict) else None
    if not candidates:
        raise AIClientError("AI provider returned no candidates")
    parts = (candidates[0] or {}).get("content", {}).get("parts", []) or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def get_ai_client() -> AIClient:
    app = current_app
    client = app.extensions.get("ai_client")
    if client is None:
        client = AIClient(
            api_key=app.config.get("GEMINI_API_KEY", ""),
            api_base=app.config.get("AI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"),
            default_model=app.config.get("AI_MODEL_NAME", "gemini-3-flash-preview"),
        )
        app.extensions["ai_client"] = client
    return client
