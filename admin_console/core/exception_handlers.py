"""Centralized exception handlers for the FastAPI app.

Every error body has the same shape: ``error``, ``message``, ``details``
and the ``request_id`` to quote when reporting a problem. Screens never
render these; they only reach API clients or a misconfigured deployment.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_console.core.config import get_settings
from admin_console.domain.exceptions import ConsoleException
from admin_console.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "RECORD_STORE_ERROR": 502,
    "USER_PROVISIONING_ERROR": 502,
    "BACKEND_NOT_CONFIGURED": 503,
}


def _error_response(
    status_code: int, error: str, message: Any, details: Any = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details if details is not None else {},
            "request_id": get_request_id(),
        },
    )


def _console_exception_handler(request: Request, exc: ConsoleException) -> JSONResponse:
    status_code = _STATUS_BY_ERROR_CODE.get(exc.error_code, 400)
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.error_code)
    body = exc.to_dict()
    return _error_response(status_code, body["error"], body["message"], body["details"])


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", exc.errors())


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", exc.detail)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed in debug mode."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register ConsoleException, request validation, HTTP and catch-all handlers."""
    app.add_exception_handler(ConsoleException, _console_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
