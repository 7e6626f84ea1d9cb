"""Domain layer: enums, exceptions, and field validators.

No dependencies on infrastructure or presentation.
"""

from admin_console.domain.enums import (
    CompanyStatus,
    GateState,
    SignInFailure,
    SubmissionState,
)
from admin_console.domain.exceptions import (
    AuthenticationException,
    BackendNotConfiguredException,
    ConsoleException,
    RecordStoreError,
    SignInError,
    UserProvisioningError,
)

__all__ = [
    "CompanyStatus",
    "GateState",
    "SignInFailure",
    "SubmissionState",
    "AuthenticationException",
    "BackendNotConfiguredException",
    "ConsoleException",
    "RecordStoreError",
    "SignInError",
    "UserProvisioningError",
]
