"""Application services: authorization gate, provisioning, sessions, navigation."""

from admin_console.application.services.authorization_gate import AuthorizationGate
from admin_console.application.services.console_session import (
    ConsoleSession,
    ConsoleSessionManager,
)
from admin_console.application.services.identity_session import IdentitySession
from admin_console.application.services.provisioning_orchestrator import (
    ProvisioningOrchestrator,
)
from admin_console.application.services.session_controller import (
    LOGIN_PATH,
    PROVISIONING_PATH,
    SessionController,
)

__all__ = [
    "AuthorizationGate",
    "ConsoleSession",
    "ConsoleSessionManager",
    "IdentitySession",
    "LOGIN_PATH",
    "PROVISIONING_PATH",
    "ProvisioningOrchestrator",
    "SessionController",
]
