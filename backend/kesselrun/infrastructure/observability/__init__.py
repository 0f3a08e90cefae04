"""Observability utilities (metrics, logging, tracing)."""

from .metrics import (
    REQUEST_COUNT,
    REQUEST_LATENCY,
    HANDLER_DISPATCH_TOTAL,
    HANDLER_DISPATCH_DURATION,
    render_metrics,
    METRICS_CONTENT_TYPE,
)
from .structured_logging import configure_structlog
from .tracing import setup_tracing, get_tracer
from .middleware import ObservabilityMiddleware, RequestLoggingMiddleware, CORRELATION_ID_HEADER

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "HANDLER_DISPATCH_TOTAL",
    "HANDLER_DISPATCH_DURATION",
    "render_metrics",
    "METRICS_CONTENT_TYPE",
    "configure_structlog",
    "setup_tracing",
    "get_tracer",
    "ObservabilityMiddleware",
    "RequestLoggingMiddleware",
    "CORRELATION_ID_HEADER",
]
