"""Session/navigation controller: sign-in and route admission.

Maps the authorization gate onto screens. Denied actors are redirected
to the sign-in entry point with replace semantics; they never see
protected content, not even while the gate is still deciding.
"""

from __future__ import annotations

import logging

from admin_console.application.dtos.navigation import RouteDecision, SignInResult
from admin_console.application.interfaces.services import IIdentityClient
from admin_console.application.services.console_session import (
    ConsoleSession,
    ConsoleSessionManager,
)
from admin_console.core import messages
from admin_console.domain.enums import GateState, SignInFailure
from admin_console.domain.exceptions import SignInError
from admin_console.domain.validators import is_valid_email

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
PROVISIONING_PATH = "/register-company"

_SIGN_IN_MESSAGES = {
    SignInFailure.INVALID_CREDENTIALS: messages.SIGN_IN_INVALID_CREDENTIALS,
    SignInFailure.OTHER: messages.SIGN_IN_RETRY_LATER,
}


class SessionController:
    """Sign-in, sign-out and admission decisions for the protected screens."""

    def __init__(
        self,
        identity_client: IIdentityClient,
        sessions: ConsoleSessionManager,
        settle_timeout: float = 5.0,
    ) -> None:
        self.identity_client = identity_client
        self.sessions = sessions
        self.settle_timeout = settle_timeout

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Authenticate and open a console session.

        Failures are reported with one of two messages chosen by the
        provider's failure classification; the provider's text is never shown.
        """
        if not is_valid_email(email) or not password:
            return SignInResult(error_message=messages.SIGN_IN_FIELDS_REQUIRED)
        try:
            identity = await self.identity_client.sign_in_with_password(
                email.strip(), password
            )
        except SignInError as exc:
            logger.info("Sign-in rejected (%s)", exc.provider_code or exc.failure.value)
            return SignInResult(error_message=_SIGN_IN_MESSAGES[exc.failure])
        except Exception:
            logger.exception("Sign-in failed unexpectedly")
            return SignInResult(error_message=messages.SIGN_IN_RETRY_LATER)

        session = await self.sessions.open(identity)
        return SignInResult(session_id=session.id, redirect_to=PROVISIONING_PATH)

    async def sign_out(self, session_id: str | None) -> RouteDecision:
        if session_id:
            await self.sessions.close(session_id)
        return RouteDecision.redirect(LOGIN_PATH)

    async def admit(self, session: ConsoleSession | None) -> RouteDecision:
        """Decide what the protected route shows for this session.

        Admin status is read again from the registry on every admission.
        """
        if session is None:
            return RouteDecision.redirect(LOGIN_PATH)
        state = await session.gate.recheck(self.settle_timeout)
        if state is GateState.ALLOWED:
            return RouteDecision.render()
        if state is GateState.PENDING:
            return RouteDecision.loading()
        return RouteDecision.redirect(LOGIN_PATH)

    @staticmethod
    def entry_point() -> RouteDecision:
        """Where the site root sends the actor."""
        return RouteDecision.redirect(PROVISIONING_PATH)
