from dataclasses import dataclass
from typing import List

import pytest
from prometheus_client import REGISTRY
from structlog.testing import capture_logs

from kesselrun.infrastructure.cqrs import (
    BusinessValidationDecorator,
    Command,
    CommandHandler,
    LogContextDecorator,
    MetricsDecorator,
    ValidationFailure,
    Validator,
    ValidatorRegistry,
)
from kesselrun.shared_kernel.exceptions import ConflictError, ValidationFailedError


@dataclass(frozen=True)
class Rename(Command):
    name: str


class CountingHandler(CommandHandler[Rename, str]):
    def __init__(self, error: Exception = None) -> None:
        self.calls = 0
        self.error = error

    async def handle(self, command: Rename) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return command.name.upper()


class NameRequired(Validator[Rename]):
    async def validate(self, request: Rename) -> List[ValidationFailure]:
        if not request.name:
            return [ValidationFailure("name", "name required")]
        return []


class NoSpaces(Validator[Rename]):
    async def validate(self, request: Rename) -> List[ValidationFailure]:
        if " " in request.name:
            return [ValidationFailure("name", "name must not contain spaces")]
        return []


def validators(*items) -> ValidatorRegistry:
    registry = ValidatorRegistry()
    for item in items:
        registry.register(Rename, item)
    registry.freeze()
    return registry


def dispatch_count(request_type: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "kesselrun_handler_dispatch_total",
        {"request_type": request_type, "outcome": outcome},
    )
    return value or 0.0


@pytest.mark.asyncio
async def test_validation_rejects_without_invoking_handler():
    handler = CountingHandler()
    decorator = BusinessValidationDecorator(handler, validators(NameRequired()))

    with pytest.raises(ValidationFailedError) as exc_info:
        await decorator.handle(Rename(""))

    assert str(exc_info.value) == "name required"
    assert exc_info.value.errors == [("name", "name required")]
    assert handler.calls == 0


@pytest.mark.asyncio
async def test_validation_collects_failures_in_registration_order():
    handler = CountingHandler()
    decorator = BusinessValidationDecorator(handler, validators(NoSpaces(), NameRequired()))

    with pytest.raises(ValidationFailedError) as exc_info:
        await decorator.handle(Rename("two words"))

    assert exc_info.value.details["errors"] == [
        {"field": "name", "message": "name must not contain spaces"}
    ]
    assert handler.calls == 0


@pytest.mark.asyncio
async def test_validation_passes_valid_requests_through():
    handler = CountingHandler()
    decorator = BusinessValidationDecorator(handler, validators(NameRequired(), NoSpaces()))

    assert await decorator.handle(Rename("gizmo")) == "GIZMO"
    assert handler.calls == 1


@pytest.mark.asyncio
async def test_validation_without_validators_forwards():
    handler = CountingHandler()
    decorator = BusinessValidationDecorator(handler, validators())

    assert await decorator.handle(Rename("")) == ""
    assert handler.calls == 1


@pytest.mark.asyncio
async def test_log_context_records_success():
    decorator = LogContextDecorator(CountingHandler())

    with capture_logs() as logs:
        assert await decorator.handle(Rename("gizmo")) == "GIZMO"

    assert [entry["event"] for entry in logs] == ["handler.started", "handler.completed"]
    completed = logs[-1]
    assert completed["outcome"] == "success"
    assert completed["request_type"] == "Rename"
    assert completed["elapsed_ms"] >= 0


@pytest.mark.asyncio
async def test_log_context_records_failure_and_reraises():
    decorator = LogContextDecorator(CountingHandler(error=ConflictError("taken")))

    with capture_logs() as logs:
        with pytest.raises(ConflictError):
            await decorator.handle(Rename("gizmo"))

    failed = logs[-1]
    assert failed["event"] == "handler.failed"
    assert failed["outcome"] == "failure"
    assert failed["error"] == "ConflictError"
    assert failed["log_level"] == "warning"


@pytest.mark.asyncio
async def test_log_context_logs_unexpected_errors_as_errors():
    decorator = LogContextDecorator(CountingHandler(error=RuntimeError("boom")))

    with capture_logs() as logs:
        with pytest.raises(RuntimeError):
            await decorator.handle(Rename("gizmo"))

    assert logs[-1]["log_level"] == "error"


@pytest.mark.asyncio
async def test_metrics_counts_outcomes():
    before_success = dispatch_count("Rename", "success")
    before_rejected = dispatch_count("Rename", "rejected")

    ok = MetricsDecorator(CountingHandler())
    await ok.handle(Rename("gizmo"))

    rejecting = MetricsDecorator(
        BusinessValidationDecorator(CountingHandler(), validators(NameRequired()))
    )
    with pytest.raises(ValidationFailedError):
        await rejecting.handle(Rename(""))

    assert dispatch_count("Rename", "success") == before_success + 1
    assert dispatch_count("Rename", "rejected") == before_rejected + 1
