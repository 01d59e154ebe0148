"""Tracing for the protocol server and relay.

Every dispatched request, tool invocation and relay turn opens a span.
Until :func:`configure_telemetry` installs an SDK provider, the
OpenTelemetry API hands out no-op tracers, so instrumented code never
needs to check whether tracing is on.

Exported spans never go to stdout: while serving, stdout is the protocol
stream.  The console exporter writes to stderr instead.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from zinc.server.config import ServerConfig

ATTR_RPC_METHOD = "zinc.rpc.method"
ATTR_RPC_ERROR_CODE = "zinc.rpc.error_code"
ATTR_TOOL_NAME = "zinc.tool.name"
ATTR_MODEL = "zinc.model"

_INSTRUMENTATION_NAME = "zinc"

_SDK_HINT = "Install the tracing extra: pip install zinc-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*; a no-op until :func:`configure_telemetry` runs."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def mark_error(span: trace.Span, code: int, message: str) -> None:
    """Tag *span* with a JSON-RPC error code and an error status."""
    span.set_attribute(ATTR_RPC_ERROR_CODE, code)
    span.set_status(Status(StatusCode.ERROR, message))


def configure_telemetry(config: ServerConfig, *, console: bool = True) -> None:
    """Install a tracer provider for the server described by *config*.

    Spans go to stderr when *console* is true and to ``config.otlp_endpoint``
    over OTLP/gRPC when one is set.

    Raises:
        ImportError: ``opentelemetry-sdk`` (or the OTLP exporter, when an
            endpoint is configured) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for tracing. {_SDK_HINT}") from exc

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": config.server_name, "service.version": config.server_version}
        )
    )
    for processor in _span_processors(console=console, otlp_endpoint=config.otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(*, console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            raise ImportError(f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}") from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
