"""Request ID middleware (raw ASGI).

Accepts a well-formed client X-Request-ID or mints one, exposes it through
a context variable for log records and error bodies, and echoes it on the
response.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Callable

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """ID of the request being handled, or None outside a request."""
    return _request_id.get()


class RequestIDLogFilter(logging.Filter):
    """Stamp every record with ``request_id`` ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


class RequestIDMiddleware:
    def __init__(self, app: Callable, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode()

    def _incoming(self, scope: dict) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                candidate = value.decode("latin-1").strip()
                # Client values end up in logs; anything unusual is replaced.
                return candidate if _SAFE_ID.match(candidate) else None
        return None

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._incoming(scope) or uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id
        token = _request_id.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (self._header_key, request_id.encode()),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        finally:
            _request_id.reset(token)
