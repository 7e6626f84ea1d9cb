"""Authorization gate: decides whether provisioning is reachable for a session.

State machine PENDING -> {DENIED, ALLOWED}, re-evaluated on every identity
notification. Registry lookup errors are treated exactly like "not an
admin": the gate fails closed and never exposes the underlying error.
"""

from __future__ import annotations

import asyncio
import logging

from admin_console.application.dtos.identity import Identity
from admin_console.application.interfaces.repositories import IAdminRegistry
from admin_console.application.interfaces.services import IIdentitySource, Unsubscribe
from admin_console.domain.enums import GateState

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Per-session admin gate bound to an identity subscription.

    Call ``start()`` once to subscribe and ``close()`` on teardown; after
    close no notification or late lookup result changes the state.
    """

    def __init__(self, identities: IIdentitySource, registry: IAdminRegistry) -> None:
        self._identities = identities
        self._registry = registry
        self._state = GateState.PENDING
        self._settled = asyncio.Event()
        self._generation = 0
        self._unsubscribe: Unsubscribe | None = None
        self._recheck_task: asyncio.Task[None] | None = None
        self._started = False
        self._closed = False

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Subscribe to identity changes; resolves the first decision before returning."""
        if self._started or self._closed:
            return
        self._started = True
        unsubscribe = await self._identities.subscribe(self._on_identity_change)
        if self._closed:
            # Closed while the first lookup was still running.
            unsubscribe()
            return
        self._unsubscribe = unsubscribe

    def close(self) -> None:
        """Unsubscribe and freeze the gate. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._recheck_task is not None and not self._recheck_task.done():
            self._recheck_task.cancel()
        if self._state is GateState.PENDING:
            self._set(GateState.DENIED)

    async def recheck(self, timeout: float) -> GateState:
        """Re-read admin status for the current identity and wait for the decision.

        A lookup already in flight is joined instead of starting another one.
        Returns PENDING when no decision arrives within ``timeout`` seconds.
        """
        if self._closed or not self._started:
            return await self.wait_until_settled(timeout)
        if self._recheck_task is None or self._recheck_task.done():
            # PENDING before the task runs so waiters never see the stale decision.
            self._set(GateState.PENDING)
            self._recheck_task = asyncio.create_task(self._recheck_current())
        return await self.wait_until_settled(timeout)

    async def wait_until_settled(self, timeout: float) -> GateState:
        """Wait up to ``timeout`` seconds for a decision; PENDING if none yet."""
        if self._state is not GateState.PENDING:
            return self._state
        try:
            await asyncio.wait_for(self._settled.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return GateState.PENDING
        return self._state

    async def _on_identity_change(self, identity: Identity | None) -> None:
        if self._closed:
            return
        self._generation += 1
        generation = self._generation

        if identity is None:
            self._set(GateState.DENIED)
            return

        # A new identity is never judged by the previous identity's decision.
        self._set(GateState.PENDING)
        allowed = await self._lookup(identity.uid)

        if self._closed or generation != self._generation:
            logger.debug("Discarding superseded admin lookup for uid %s", identity.uid)
            return
        self._set(GateState.ALLOWED if allowed else GateState.DENIED)

    async def _recheck_current(self) -> None:
        await self._on_identity_change(self._identities.current)

    async def _lookup(self, uid: str) -> bool:
        try:
            return await self._registry.is_admin(uid)
        except Exception as exc:
            logger.warning("Admin registry lookup failed for uid %s; denying: %s", uid, exc)
            return False

    def _set(self, state: GateState) -> None:
        if state is not self._state:
            logger.debug("Authorization gate %s -> %s", self._state.value, state.value)
        self._state = state
        if state is GateState.PENDING:
            self._settled.clear()
        else:
            self._settled.set()
