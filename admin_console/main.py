"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See admin_console.core.lifespan and
admin_console.core.exception_handlers. API docs are only served in debug
(the console CSP blocks the docs UI assets anyway).

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from admin_console.api.screens import router as screens_router
from admin_console.api.v1 import api_router
from admin_console.core.config import get_settings
from admin_console.core.exception_handlers import register_exception_handlers
from admin_console.core.lifespan import create_lifespan
from admin_console.core.limiter import limiter
from admin_console.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from admin_console.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url=None,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: request ID -> security headers -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(screens_router)

    return app


app = create_app()
