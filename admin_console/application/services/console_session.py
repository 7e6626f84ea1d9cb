"""Server-side console sessions: one per signed-in browser.

Each session owns its identity session, authorization gate and
provisioning orchestrator, so the "one attempt in flight" rule and the
gate subscription are scoped to a single operator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from admin_console.application.dtos.company import ProvisioningOutcome
from admin_console.application.dtos.identity import Identity
from admin_console.application.interfaces.repositories import (
    IAdminRegistry,
    ICompanyRepository,
)
from admin_console.application.interfaces.services import (
    IIdentityClient,
    IUserProvisioner,
    TokenSource,
)
from admin_console.application.services.authorization_gate import AuthorizationGate
from admin_console.application.services.identity_session import IdentitySession
from admin_console.application.services.provisioning_orchestrator import (
    OrphanedCompanyHook,
    ProvisioningOrchestrator,
)
from admin_console.domain.value_objects import CompanyForm
from admin_console.shared.utils.datetime import utc_now
from admin_console.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

ProvisionerFactory = Callable[[TokenSource], IUserProvisioner]


@dataclass
class ConsoleSession:
    """State held for one signed-in operator."""

    id: str
    identities: IdentitySession
    gate: AuthorizationGate
    orchestrator: ProvisioningOrchestrator
    expires_at: datetime
    form: CompanyForm = field(default_factory=CompanyForm)
    last_outcome: ProvisioningOutcome | None = None

    def is_expired(self) -> bool:
        return utc_now() >= self.expires_at

    async def submit(self, form: CompanyForm) -> ProvisioningOutcome | None:
        """Submit through the orchestrator and keep the form to show next."""
        outcome = await self.orchestrator.submit(form)
        if outcome is not None:
            self.form = outcome.form
            self.last_outcome = outcome
        return outcome


class ConsoleSessionManager:
    """In-memory registry of console sessions keyed by opaque session id."""

    def __init__(
        self,
        identity_client: IIdentityClient,
        admin_registry: IAdminRegistry,
        company_repo: ICompanyRepository,
        provisioner_factory: ProvisionerFactory,
        *,
        ttl: timedelta = timedelta(hours=8),
        classification: str = "INVENTORY_CONTRACTOR",
        strict_tax_id: bool = False,
        on_orphaned_company: OrphanedCompanyHook | None = None,
    ) -> None:
        self.identity_client = identity_client
        self.admin_registry = admin_registry
        self.company_repo = company_repo
        self.provisioner_factory = provisioner_factory
        self.ttl = ttl
        self.classification = classification
        self.strict_tax_id = strict_tax_id
        self.on_orphaned_company = on_orphaned_company
        self._sessions: dict[str, ConsoleSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, identity: Identity) -> ConsoleSession:
        """Create a session for a freshly signed-in identity and start its gate.

        Sessions that expired without being requested again are closed first.
        """
        await self.close_expired()
        identities = IdentitySession(self.identity_client, identity)
        gate = AuthorizationGate(identities, self.admin_registry)
        orchestrator = ProvisioningOrchestrator(
            self.company_repo,
            self.provisioner_factory(identities.get_id_token),
            classification=self.classification,
            strict_tax_id=self.strict_tax_id,
            on_orphaned_company=self.on_orphaned_company,
        )
        session = ConsoleSession(
            id=generate_cuid(),
            identities=identities,
            gate=gate,
            orchestrator=orchestrator,
            expires_at=utc_now() + self.ttl,
        )
        self._sessions[session.id] = session
        await gate.start()
        logger.info("Console session opened for uid %s (gate: %s)", identity.uid, gate.state.value)
        return session

    async def get(self, session_id: str | None) -> ConsoleSession | None:
        """Return a live session; expired sessions are closed and dropped."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired():
            await self.close(session_id)
            return None
        return session

    async def close(self, session_id: str) -> None:
        """Sign out, tear down the gate subscription and forget the session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        await session.identities.sign_out()
        session.gate.close()
        logger.info("Console session %s closed", session_id)

    async def close_expired(self) -> int:
        """Close every expired session; returns how many were closed."""
        expired = [sid for sid, session in self._sessions.items() if session.is_expired()]
        for session_id in expired:
            await self.close(session_id)
        if expired:
            logger.info("Closed %d expired console session(s)", len(expired))
        return len(expired)

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close(session_id)
