"""Per-session identity holder implementing the push subscription contract."""

from __future__ import annotations

import logging

from admin_console.application.dtos.identity import Identity
from admin_console.application.interfaces.services import (
    IdentityListener,
    IIdentityClient,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


class IdentitySession:
    """Current identity of one console session and its change listeners.

    Listeners receive the current identity when they subscribe and again on
    every change: sign-out, or a token refresh that yields a different uid.
    Notifications are awaited in subscription order.
    """

    def __init__(self, client: IIdentityClient, identity: Identity | None = None) -> None:
        self._client = client
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    @property
    def current(self) -> Identity | None:
        return self._identity

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def subscribe(self, listener: IdentityListener) -> Unsubscribe:
        """Register listener and deliver the current identity to it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        await self._deliver(listener, self._identity)
        return unsubscribe

    async def sign_out(self) -> None:
        """Forget the identity and notify listeners (no-op when already signed out)."""
        if self._identity is None:
            return
        self._identity = None
        await self._publish()

    async def get_id_token(self) -> str | None:
        """Return a non-expired ID token, refreshing through the provider if needed.

        Refresh failures propagate to the caller; the identity is kept so
        a later call can retry.
        """
        identity = self._identity
        if identity is None:
            return None
        if not identity.is_expired():
            return identity.id_token
        refreshed = await self._client.refresh(identity)
        if self._identity is not identity:
            # Signed out (or replaced) while the refresh was in flight.
            return self._identity.id_token if self._identity else None
        self._identity = refreshed
        # Same-uid refreshes stay silent: admission re-reads admin status anyway,
        # and a refresh during provisioning must not flip the gate to PENDING.
        if refreshed.uid != identity.uid:
            logger.warning(
                "Token refresh changed identity uid for session (%s -> %s)",
                identity.uid,
                refreshed.uid,
            )
            await self._publish()
        return refreshed.id_token

    async def _publish(self) -> None:
        for listener in list(self._listeners):
            await self._deliver(listener, self._identity)

    async def _deliver(self, listener: IdentityListener, identity: Identity | None) -> None:
        try:
            await listener(identity)
        except Exception:
            logger.exception("Identity listener %r failed", listener)
