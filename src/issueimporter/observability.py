"""OpenTelemetry wiring for import runs.

Until ``configure_telemetry`` installs an SDK provider the API hands out
no-op tracers, so instrumented code costs nothing when tracing is off.
"""

from __future__ import annotations

from typing import Final

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

TRACER_NAME = "issueimporter"

_telemetry_configured: Final[dict[str, bool]] = {"configured": False}


def configure_telemetry(
    *, service_name: str = TRACER_NAME, exporter: SpanExporter | None = None
) -> None:
    """Install a tracer provider once per process (console exporter by default)."""
    if _telemetry_configured["configured"]:
        return
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    _telemetry_configured["configured"] = True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


__all__ = ["configure_telemetry", "get_tracer", "TRACER_NAME"]
