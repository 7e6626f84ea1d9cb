"""Liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from admin_console.core.config import get_settings
from admin_console.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """503 until the lifespan has wired Firebase (credentials and web API key)."""
    controller = getattr(request.app.state, "session_controller", None)
    if controller is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Firebase is not configured").model_dump(),
        )
    return ReadinessResponse(active_sessions=len(controller.sessions))
