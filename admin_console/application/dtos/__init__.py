"""DTOs passed between application services, adapters and routes."""

from admin_console.application.dtos.company import (
    CompanyResult,
    ProvisioningOutcome,
    ProvisioningResult,
)
from admin_console.application.dtos.identity import Identity
from admin_console.application.dtos.navigation import RouteDecision, RouteKind, SignInResult

__all__ = [
    "CompanyResult",
    "Identity",
    "ProvisioningOutcome",
    "ProvisioningResult",
    "RouteDecision",
    "RouteKind",
    "SignInResult",
]
