"""Prometheus metrics helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

REQUEST_COUNT = Counter(
    "studymate_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "studymate_request_latency_seconds",
    "Latency of HTTP requests in seconds",
    ["endpoint"],
)
QUOTA_DECISIONS = Counter(
    "studymate_quota_decisions_total",
    "Daily usage quota decisions",
    ["outcome"],
)
AI_REQUESTS = Counter(
    "studymate_ai_requests_total",
    "Calls to the generative AI provider by query kind",
    ["kind", "outcome"],
)


def record_request(method: str, endpoint: str, status: int, latency: float) -> None:
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)


def record_quota_decision(outcome: str) -> None:
    QUOTA_DECISIONS.labels(outcome=outcome).inc()


def record_ai_request(kind: str, outcome: str) -> None:
    AI_REQUESTS.labels(kind=kind, outcome=outcome).inc()


def latest_metrics() -> tuple[bytes, str]:
    data = generate_latest()
    return data, CONTENT_TYPE_LATEST
