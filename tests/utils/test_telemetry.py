"""Tests for tracing helpers."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace
from opentelemetry.trace import StatusCode

from zinc.server.config import ServerConfig
from zinc.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    configure_telemetry,
    get_tracer,
    mark_error,
)


def _require_sdk() -> None:
    try:
        import opentelemetry.sdk.trace  # noqa: F401
    except ImportError:
        pytest.skip("opentelemetry-sdk not installed")


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        with get_tracer("test.noop").start_as_current_span("rpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, "ping")


class TestMarkError:
    def test_sets_code_and_status(self) -> None:
        span = MagicMock()
        mark_error(span, -32601, "Method not found: nope")
        span.set_attribute.assert_called_once_with(ATTR_RPC_ERROR_CODE, -32601)
        status = span.set_status.call_args.args[0]
        assert status.status_code is StatusCode.ERROR
        assert status.description == "Method not found: nope"


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry(ServerConfig())

    def test_console_exporter_writes_to_stderr(self) -> None:
        """Spans must never land on stdout, which carries the protocol stream."""
        _require_sdk()
        from opentelemetry.sdk.trace import TracerProvider

        with (
            patch("zinc.utils.telemetry.trace.set_tracer_provider") as set_provider,
            patch("opentelemetry.sdk.trace.export.ConsoleSpanExporter") as exporter_cls,
        ):
            configure_telemetry(ServerConfig(server_name="test-svc"))

        provider = set_provider.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-svc"
        exporter_cls.assert_called_once_with(out=sys.stderr)
        provider.shutdown()

    def test_console_disabled(self) -> None:
        _require_sdk()
        with (
            patch("zinc.utils.telemetry.trace.set_tracer_provider") as set_provider,
            patch("opentelemetry.sdk.trace.export.ConsoleSpanExporter") as exporter_cls,
        ):
            configure_telemetry(ServerConfig(), console=False)

        set_provider.assert_called_once()
        exporter_cls.assert_not_called()

    def test_otlp_raises_without_exporter(self) -> None:
        _require_sdk()
        config = ServerConfig(otlp_endpoint="http://localhost:4317")
        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(config, console=False)
