"""API v1: health probes."""

from admin_console.api.v1.router import api_router

__all__ = ["api_router"]
