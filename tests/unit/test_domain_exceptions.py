"""Tests for domain exceptions (error_code, message, details)."""

from admin_console.domain.enums import SignInFailure
from admin_console.domain.exceptions import (
    AuthenticationException,
    BackendNotConfiguredException,
    ConsoleException,
    RecordStoreError,
    SignInError,
    UserProvisioningError,
)


def test_console_exception_default_error_code() -> None:
    """Base ConsoleException uses class name as error_code when not provided."""
    exc = ConsoleException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ConsoleException"
    assert exc.details == {}


def test_console_exception_to_dict() -> None:
    exc = ConsoleException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_sign_in_error_is_authentication_error() -> None:
    """SignInError keeps the failure class and hides the provider code from details."""
    exc = SignInError(SignInFailure.INVALID_CREDENTIALS, "INVALID_PASSWORD")
    assert isinstance(exc, AuthenticationException)
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.failure is SignInFailure.INVALID_CREDENTIALS
    assert exc.provider_code == "INVALID_PASSWORD"
    assert exc.details == {"failure": "invalid_credentials"}


def test_record_store_error_carries_status() -> None:
    exc = RecordStoreError("denied", status_code=403)
    assert exc.error_code == "RECORD_STORE_ERROR"
    assert exc.status_code == 403
    assert exc.details == {"status_code": 403}


def test_user_provisioning_error_without_backend_message() -> None:
    exc = UserProvisioningError(None, company_id="co1", status="UNAVAILABLE")
    assert exc.backend_message is None
    assert exc.message == "User provisioning failed"
    assert exc.details == {"company_id": "co1", "status": "UNAVAILABLE"}


def test_backend_not_configured() -> None:
    exc = BackendNotConfiguredException("firebase")
    assert exc.error_code == "BACKEND_NOT_CONFIGURED"
    assert exc.details == {"component": "firebase"}
