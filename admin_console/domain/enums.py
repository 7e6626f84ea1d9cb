"""Domain enumerations for the admin console."""

from enum import Enum


class CompanyStatus(str, Enum):
    """Company lifecycle status. New companies are always ACTIVE."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class GateState(str, Enum):
    """Authorization gate decision for the current session.

    PENDING until the first identity notification has been resolved;
    any doubt (no identity, unknown admin, lookup failure) is DENIED.
    """

    PENDING = "pending"
    DENIED = "denied"
    ALLOWED = "allowed"


class SubmissionState(str, Enum):
    """Provisioning orchestrator state.

    SUCCESS and ERROR are terminal for one attempt; the orchestrator
    accepts a new submission from either of them.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SignInFailure(str, Enum):
    """Classification of identity-provider sign-in failures."""

    INVALID_CREDENTIALS = "invalid_credentials"
    OTHER = "other"
