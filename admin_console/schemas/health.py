"""Health probe schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness: the process is serving requests."""

    status: str = Field(default="ok")
    version: str = Field(..., description="Application version")


class ReadinessResponse(BaseModel):
    """Readiness: sign-in and provisioning are wired to Firebase."""

    status: str = Field(default="ok")
    active_sessions: int = Field(..., ge=0, description="Open console sessions")


class ReadinessErrorResponse(BaseModel):
    status: str = Field(default="not_ready")
    message: str = Field(..., description="Why the console cannot serve operators")
