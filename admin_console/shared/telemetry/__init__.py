"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from admin_console.shared.telemetry.logging import setup_logging
from admin_console.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from admin_console.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
