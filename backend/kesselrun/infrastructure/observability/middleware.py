"""Observability middlewares for FastAPI."""
from __future__ import annotations

import logging
import time
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .metrics import REQUEST_COUNT, REQUEST_LATENCY
from .tracing import get_tracer

CORRELATION_ID_HEADER = "X-Correlation-ID"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        tracer = get_tracer("kesselrun.http")
        if tracer:
            with tracer.start_as_current_span(
                f"{request.method} {request.url.path}"
            ) as span:
                response = await call_next(request)
                span.set_attribute("http.status_code", response.status_code)
        else:
            response = await call_next(request)
        duration = time.perf_counter() - start
        REQUEST_COUNT.labels(request.method, request.url.path, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(request.method, request.url.path).observe(duration)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds request details to the log context and logs one line per request.

    The correlation id is taken from the incoming header when present and
    echoed on the response.
    """

    def __init__(self, app, logger=None) -> None:
        super().__init__(app)
        self._logger = logger or structlog.get_logger("kesselrun.http")

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
        start = time.perf_counter()
        try:
            response = await call_next(request)
            level = logging.ERROR if response.status_code >= 500 else (
                logging.WARNING if response.status_code >= 400 else logging.INFO
            )
            self._logger.log(
                level,
                "http.request",
                status_code=response.status_code,
                elapsed_ms=round((time.perf_counter() - start) * 1000, 3),
            )
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        except Exception as exc:
            self._logger.error(
                "http.request",
                status_code=500,
                error=type(exc).__name__,
                elapsed_ms=round((time.perf_counter() - start) * 1000, 3),
            )
            raise
        finally:
            structlog.contextvars.clear_contextvars()
