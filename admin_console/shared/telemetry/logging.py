"""Process-wide logging setup for the console."""

import logging
import sys

from admin_console.core.config import get_settings
from admin_console.middleware.request_id import RequestIDLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Log to stdout at DEBUG (settings.debug) or INFO, tagging records with the request id."""
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    # httpx logs request URLs at INFO and Identity Toolkit URLs carry the web API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
