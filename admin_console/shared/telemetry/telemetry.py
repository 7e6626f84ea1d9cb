"""OpenTelemetry setup for the console.

Spans cover the remote calls (Identity Toolkit, Firestore, the provisioning
function) and incoming requests. Exporters: OTLP over gRPC, console, or none.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

if TYPE_CHECKING:
    from admin_console.core.config import Settings

logger = logging.getLogger(__name__)

# Probes would otherwise dominate the trace volume.
_UNTRACED_URLS = "/api/v1/health"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT not set; falling back to console exporter")
    elif exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Owns the tracer provider for one app instance."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=settings.telemetry_enabled,
            environment=settings.telemetry_environment,
        )

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install the global tracer provider. Returns None when disabled or on failure."""
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(sample_rate),
            )
            exporter = _build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s, exporter=%s, sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument(self, app: FastAPI) -> None:
        """Trace incoming requests and inject trace ids into log records."""
        if self.tracer_provider is None:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=_UNTRACED_URLS
            )
            LoggingInstrumentor().instrument(tracer_provider=self.tracer_provider)
        except Exception:
            logger.exception("Failed to instrument the app")

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear, with None) the process-wide telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
