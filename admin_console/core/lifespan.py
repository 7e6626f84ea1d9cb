"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (shared HTTP client, Firebase
adapters, console sessions, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from admin_console.api.dependencies import build_session_controller
from admin_console.core.config import get_settings
from admin_console.infrastructure.firebase import build_firestore_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client, Firestore client, session controller,
    telemetry (if enabled). Shutdown order: console sessions, HTTP client
    close, telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for Firestore, Identity Toolkit and callable functions.
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    firestore = build_firestore_client(settings, app.state.http_client)
    app.state.session_controller = build_session_controller(
        settings, app.state.http_client, firestore
    )

    if settings.telemetry_enabled:
        from admin_console.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument(app)
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    controller = getattr(app.state, "session_controller", None)
    if controller is not None:
        await controller.sessions.close_all()
        logger.info("Console sessions closed")

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    from admin_console.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
