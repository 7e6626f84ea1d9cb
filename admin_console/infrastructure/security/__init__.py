"""Security helpers: signed session cookie tokens."""

from admin_console.infrastructure.security.session_token import (
    create_session_token,
    read_session_token,
)

__all__ = ["create_session_token", "read_session_token"]
