"""Cross-cutting decorators wrapped around command and query handlers."""
from __future__ import annotations

import time
from typing import Any, Optional

import structlog
from structlog.contextvars import bound_contextvars, get_contextvars

from kesselrun.infrastructure.di.container import ScopedContainer
from kesselrun.infrastructure.observability.metrics import (
    HANDLER_DISPATCH_DURATION,
    HANDLER_DISPATCH_TOTAL,
)
from kesselrun.shared_kernel.exceptions import ValidationFailedError, determine_log_level

from .handlers import HandlerDecorator, RequestHandler
from .validation import ValidatorRegistry


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)


class LogContextDecorator(HandlerDecorator):
    """Logs entry and exit of a handler with the request type bound to the
    log context, so every log line emitted down the chain carries it."""

    def __init__(self, inner: RequestHandler, logger: Optional[Any] = None) -> None:
        super().__init__(inner)
        self._logger = logger or structlog.get_logger(__name__)

    async def handle(self, request: Any) -> Any:
        request_type = type(request).__name__
        log = self._logger.bind(
            request_type=request_type,
            correlation_id=get_contextvars().get("correlation_id"),
        )
        start = time.perf_counter()
        with bound_contextvars(request_type=request_type):
            log.info("handler.started")
            try:
                result = await self.inner.handle(request)
            except Exception as exc:
                log.log(
                    determine_log_level(exc),
                    "handler.failed",
                    outcome="failure",
                    error=type(exc).__name__,
                    detail=str(exc),
                    elapsed_ms=_elapsed_ms(start),
                )
                raise
            log.info("handler.completed", outcome="success", elapsed_ms=_elapsed_ms(start))
            return result


class MetricsDecorator(HandlerDecorator):
    async def handle(self, request: Any) -> Any:
        request_type = type(request).__name__
        start = time.perf_counter()
        outcome = "success"
        try:
            return await self.inner.handle(request)
        except ValidationFailedError:
            outcome = "rejected"
            raise
        except Exception:
            outcome = "failure"
            raise
        finally:
            HANDLER_DISPATCH_TOTAL.labels(request_type, outcome).inc()
            HANDLER_DISPATCH_DURATION.labels(request_type).observe(time.perf_counter() - start)


class BusinessValidationDecorator(HandlerDecorator):
    """Rejects a request before the inner handler runs when any registered
    validator reports a failure."""

    def __init__(self, inner: RequestHandler, validators: ValidatorRegistry) -> None:
        super().__init__(inner)
        self._validators = validators

    async def handle(self, request: Any) -> Any:
        failures = []
        for validator in self._validators.validators_for(type(request)):
            failures.extend(await validator.validate(request))
        if failures:
            raise ValidationFailedError([(failure.field, failure.message) for failure in failures])
        return await self.inner.handle(request)


def log_context(inner: RequestHandler, scope: ScopedContainer) -> RequestHandler:
    return LogContextDecorator(inner)


def metrics(inner: RequestHandler, scope: ScopedContainer) -> RequestHandler:
    return MetricsDecorator(inner)


def business_validation(inner: RequestHandler, scope: ScopedContainer) -> RequestHandler:
    return BusinessValidationDecorator(inner, scope.resolve(ValidatorRegistry))


COMMAND_PIPELINE = (log_context, metrics, business_validation)
QUERY_PIPELINE = (log_context, metrics)
