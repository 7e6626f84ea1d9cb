"""FastAPI dependencies for the console screens.

The session controller is built once at startup (see core.lifespan) and
kept on app.state; tests replace it with one wired to fakes.
"""

from __future__ import annotations

from fastapi import Request

from admin_console.api.dependencies._composition import build_session_controller
from admin_console.application.services.console_session import ConsoleSession
from admin_console.application.services.session_controller import SessionController
from admin_console.core.config import get_settings
from admin_console.domain.exceptions import BackendNotConfiguredException
from admin_console.infrastructure.security.session_token import read_session_token


def get_session_controller(request: Request) -> SessionController:
    """Return the app's session controller; 503 when Firebase is not configured."""
    controller = getattr(request.app.state, "session_controller", None)
    if controller is None:
        raise BackendNotConfiguredException("firebase")
    return controller


def get_session_id(request: Request) -> str | None:
    """Console session id from the signed cookie, or None."""
    settings = get_settings()
    return read_session_token(request.cookies.get(settings.session_cookie_name))


async def get_console_session(request: Request) -> ConsoleSession | None:
    """Live console session for this browser, or None."""
    controller = get_session_controller(request)
    return await controller.sessions.get(get_session_id(request))


__all__ = [
    "build_session_controller",
    "get_console_session",
    "get_session_controller",
    "get_session_id",
]
