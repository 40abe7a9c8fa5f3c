"""
catalog_stack.observability.metrics

Prometheus instruments for the HTTP surface.

Responsibilities:
- Count requests by method, route template and status.
- Record request latency.
- Render the text exposition served at `/metrics`.
"""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_COUNT = Counter(
    "catalog_http_requests_total",
    "Total HTTP requests",
    ["method", "route", "status"],
)
REQUEST_DURATION = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "route"],
)


def observe_request(*, method: str, route: str, status: int, seconds: float) -> None:
    REQUEST_COUNT.labels(method=method, route=route, status=str(status)).inc()
    REQUEST_DURATION.labels(method=method, route=route).observe(seconds)


def render_latest() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


# --- Module Notes -----------------------------------------------------------
# Routes are labelled by template (`/produtos/{id}`) to keep label cardinality bounded.
