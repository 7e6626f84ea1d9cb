"""Ports: protocols implemented by infrastructure adapters."""

from admin_console.application.interfaces.repositories import (
    IAdminRegistry,
    ICompanyRepository,
)
from admin_console.application.interfaces.services import (
    IdentityListener,
    IIdentityClient,
    IIdentitySource,
    IUserProvisioner,
    TokenSource,
    Unsubscribe,
)

__all__ = [
    "IAdminRegistry",
    "ICompanyRepository",
    "IIdentityClient",
    "IIdentitySource",
    "IUserProvisioner",
    "TokenSource",
    "IdentityListener",
    "Unsubscribe",
]
