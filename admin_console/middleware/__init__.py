"""Raw ASGI middleware: request ID and security headers."""

from admin_console.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    get_request_id,
)
from admin_console.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDLogFilter",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "get_request_id",
]
