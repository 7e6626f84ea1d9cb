"""Core: config, operator messages, and application bootstrap."""

from admin_console.core.config import get_settings

__all__ = ["get_settings"]
