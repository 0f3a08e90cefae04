"""Prometheus metrics definitions."""
from __future__ import annotations

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST


REQUEST_COUNT = Counter(
    "kesselrun_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "kesselrun_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5],
)

HANDLER_DISPATCH_TOTAL = Counter(
    "kesselrun_handler_dispatch_total",
    "Total command/query dispatches",
    ["request_type", "outcome"],
)

HANDLER_DISPATCH_DURATION = Histogram(
    "kesselrun_handler_dispatch_duration_seconds",
    "Command/query handler chain duration",
    ["request_type"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5],
)


def render_metrics() -> bytes:
    return generate_latest()


METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST
