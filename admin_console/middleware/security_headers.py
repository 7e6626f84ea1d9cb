"""Security headers for the console screens (raw ASGI).

The screens only need inline styles, one same-origin script and
same-origin form posts; everything else is refused. Pages carry operator
passwords on re-render, so nothing is cacheable.
"""

from typing import Callable

CONSOLE_CSP = "; ".join(
    [
        "default-src 'none'",
        "style-src 'unsafe-inline'",
        "script-src 'self'",
        "form-action 'self'",
        "frame-ancestors 'none'",
        "base-uri 'none'",
    ]
)

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Security-Policy": CONSOLE_CSP,
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware:
    """Add DEFAULT_HEADERS (or ``headers``) unless the route already set them."""

    def __init__(self, app: Callable, headers: dict[str, str] | None = None) -> None:
        self.app = app
        self._headers = [
            (name.lower().encode(), value.encode())
            for name, value in (headers or DEFAULT_HEADERS).items()
        ]

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                existing = list(message.get("headers", []))
                present = {name.lower() for name, _ in existing}
                existing.extend(h for h in self._headers if h[0] not in present)
                message["headers"] = existing
            await send(message)

        await self.app(scope, receive, send_with_headers)
