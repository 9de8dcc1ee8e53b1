"""Tests for OpenTelemetry configuration."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

from railops.core.telemetry import (
    configure_opentelemetry,
    instrument_fastapi,
    instrument_httpx,
)


class TestConfigureOpentelemetry:
    """Tests for configure_opentelemetry function."""

    def test_disabled_logs_message_and_returns_early(self, caplog):
        with caplog.at_level(logging.INFO):
            configured = configure_opentelemetry(
                service_name="test-service",
                service_version="1.0.0",
                otlp_endpoint="http://localhost:4317",
                enabled=False,
            )

        assert configured is False
        assert "tracing is disabled" in caplog.text.lower()

    @patch("railops.core.telemetry.set_global_textmap")
    @patch("railops.core.telemetry.trace")
    @patch("railops.core.telemetry.TracerProvider")
    @patch("railops.core.telemetry.OTLPSpanExporter")
    @patch("railops.core.telemetry.BatchSpanProcessor")
    def test_enabled_configures_tracer_provider(
        self,
        mock_batch_processor,
        mock_exporter,
        mock_tracer_provider,
        mock_trace,
        mock_set_textmap,
    ):
        provider_instance = MagicMock()
        mock_tracer_provider.return_value = provider_instance

        configured = configure_opentelemetry(
            service_name="test-service",
            service_version="1.0.0",
            otlp_endpoint="http://localhost:4317",
            enabled=True,
        )

        assert configured is True
        mock_set_textmap.assert_called_once()
        mock_trace.set_tracer_provider.assert_called_once_with(provider_instance)
        mock_exporter.assert_called_once_with(
            endpoint="http://localhost:4317", headers=None
        )
        provider_instance.add_span_processor.assert_called_once_with(
            mock_batch_processor.return_value
        )

    @patch("railops.core.telemetry.set_global_textmap")
    @patch("railops.core.telemetry.TracerProvider", side_effect=RuntimeError("boom"))
    def test_failure_is_logged_not_raised(self, _provider, _textmap, caplog):
        with caplog.at_level(logging.WARNING):
            configured = configure_opentelemetry(
                service_name="test-service",
                service_version="1.0.0",
                otlp_endpoint="http://localhost:4317",
                enabled=True,
            )

        assert configured is False
        assert "failed to configure opentelemetry" in caplog.text.lower()


class TestInstrumentation:
    @patch("railops.core.telemetry.FastAPIInstrumentor")
    def test_fastapi_instrumentation_skipped_when_disabled(self, mock_instrumentor):
        instrument_fastapi(MagicMock(), enabled=False)

        mock_instrumentor.instrument_app.assert_not_called()

    @patch("railops.core.telemetry.FastAPIInstrumentor")
    def test_fastapi_instrumentation_applied_when_enabled(self, mock_instrumentor):
        app = MagicMock()

        instrument_fastapi(app, enabled=True)

        mock_instrumentor.instrument_app.assert_called_once_with(app)

    @patch("railops.core.telemetry.HTTPXClientInstrumentor")
    def test_httpx_instrumentation_applied_when_enabled(self, mock_instrumentor):
        instrument_httpx(enabled=True)

        mock_instrumentor.return_value.instrument.assert_called_once()
