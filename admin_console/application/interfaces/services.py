"""Service interfaces (ports) for the identity provider and provisioning RPC."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from admin_console.application.dtos.company import ProvisioningResult
    from admin_console.application.dtos.identity import Identity
    from admin_console.domain.value_objects import AccountCredentials

IdentityListener = Callable[["Identity | None"], Awaitable[None]]
Unsubscribe = Callable[[], None]
TokenSource = Callable[[], Awaitable["str | None"]]


class IIdentityClient(Protocol):
    """Credential calls against the identity provider."""

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Sign in; raise SignInError with the provider's classification on failure."""

    async def refresh(self, identity: Identity) -> Identity:
        """Exchange the refresh token for a fresh ID token."""


class IIdentitySource(Protocol):
    """Push subscription yielding "current identity or none" on every change."""

    @property
    def current(self) -> Identity | None:
        """Identity right now, without waiting for a notification."""

    async def subscribe(self, listener: IdentityListener) -> Unsubscribe:
        """Register listener, deliver the current identity to it, return the unsubscribe handle."""


class IUserProvisioner(Protocol):
    """Privileged operation that creates a company's user accounts."""

    async def create_company_users(
        self,
        company_id: str,
        admin: AccountCredentials,
        master: AccountCredentials | None,
    ) -> ProvisioningResult:
        """Create the admin (and optional master) account for company_id.

        Raises UserProvisioningError carrying the backend message on failure.
        """
