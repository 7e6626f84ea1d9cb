"""Presentation-layer composition root.

Builds the session controller from Firebase infrastructure. Routes depend
only on the controller (via api.dependencies), never on infra directly.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import httpx

from admin_console.application.interfaces.services import TokenSource
from admin_console.application.services.console_session import ConsoleSessionManager
from admin_console.application.services.session_controller import SessionController
from admin_console.core.config import Settings
from admin_console.infrastructure.firebase._rest_client import FirestoreRESTClient
from admin_console.infrastructure.firebase.repositories import (
    FirestoreAdminRegistry,
    FirestoreCompanyRepository,
)
from admin_console.infrastructure.firebase.services import (
    CallableFunctionProvisioner,
    FirebaseIdentityClient,
    callable_function_url,
)

logger = logging.getLogger(__name__)


def _log_orphaned_company(company_id: str, error: Exception) -> None:
    logger.error(
        "Company %s has no users; clean it up or re-run user creation (%s)",
        company_id,
        type(error).__name__,
    )


def build_session_controller(
    settings: Settings,
    http_client: httpx.AsyncClient,
    firestore: FirestoreRESTClient | None,
) -> SessionController | None:
    """Return the controller, or None when Firebase is not fully configured."""
    if firestore is None:
        logger.warning("Firestore not configured; provisioning console disabled")
        return None
    if not settings.firebase_auth_configured:
        logger.warning("FIREBASE_WEB_API_KEY not set; sign-in disabled")
        return None

    identity_client = FirebaseIdentityClient(
        http_client,
        settings.firebase_web_api_key.get_secret_value(),
        identity_toolkit_url=settings.identity_toolkit_base_url,
        secure_token_url=settings.secure_token_base_url,
    )
    function_url = callable_function_url(
        firestore.project_id,
        settings.provisioning_function_name,
        region=settings.functions_region,
        base_url=settings.functions_base_url,
    )

    def provisioner_factory(token_source: TokenSource) -> CallableFunctionProvisioner:
        return CallableFunctionProvisioner(http_client, function_url, token_source)

    sessions = ConsoleSessionManager(
        identity_client,
        FirestoreAdminRegistry(firestore, settings.admins_collection),
        FirestoreCompanyRepository(firestore, settings.companies_collection),
        provisioner_factory,
        ttl=timedelta(minutes=settings.session_expire_minutes),
        classification=settings.default_company_classification,
        strict_tax_id=settings.strict_tax_id_validation,
        on_orphaned_company=_log_orphaned_company,
    )
    return SessionController(
        identity_client,
        sessions,
        settle_timeout=settings.gate_settle_timeout_seconds,
    )
