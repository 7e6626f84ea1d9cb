"""Domain exceptions for the admin console.

Defines domain-level exceptions for sign-in, backend configuration
and the two remote steps of company provisioning. Adapters translate
transport errors into these; the presentation layer maps them to HTTP
responses in exception handlers.
"""

from typing import Any

from admin_console.domain.enums import SignInFailure


class ConsoleException(Exception):
    """Base exception for all console errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, company_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class AuthenticationException(ConsoleException):
    """Raised when there is no valid console session."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class SignInError(AuthenticationException):
    """Sign-in rejected by the identity provider.

    ``failure`` carries the provider's classification; ``provider_code``
    is the raw code (e.g. ``INVALID_PASSWORD``) for logs only.
    """

    def __init__(
        self, failure: SignInFailure, provider_code: str | None = None
    ) -> None:
        super().__init__(f"Sign-in failed: {failure.value}")
        self.failure = failure
        self.provider_code = provider_code
        self.details = {"failure": failure.value}


class RecordStoreError(ConsoleException):
    """Record store (Firestore) call failed: authorization or connectivity."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "RECORD_STORE_ERROR", details)
        self.status_code = status_code


class UserProvisioningError(ConsoleException):
    """Privileged user-provisioning call failed.

    ``backend_message`` is the operator-displayable text supplied by the
    backend, if any. ``company_id`` identifies the company record that
    now exists without users.
    """

    def __init__(
        self,
        backend_message: str | None,
        company_id: str | None = None,
        status: str | None = None,
    ) -> None:
        super().__init__(
            backend_message or "User provisioning failed",
            "USER_PROVISIONING_ERROR",
            {"company_id": company_id, "status": status},
        )
        self.backend_message = backend_message
        self.company_id = company_id
        self.status = status


class BackendNotConfiguredException(ConsoleException):
    """Firebase credentials or API key are missing."""

    def __init__(self, component: str) -> None:
        super().__init__(
            f"{component} is not configured",
            "BACKEND_NOT_CONFIGURED",
            {"component": component},
        )
