"""OpenTelemetry tracing setup."""
from __future__ import annotations

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

_TRACING_CONFIGURED = False


def setup_tracing(service_name: str) -> None:
    global _TRACING_CONFIGURED
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    _TRACING_CONFIGURED = True


def get_tracer(name: str) -> Optional[trace.Tracer]:
    if not _TRACING_CONFIGURED:
        return None
    return trace.get_tracer(name)
