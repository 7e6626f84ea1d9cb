"""HTTPS callable Cloud Function client for the user-provisioning operation.

Callable protocol: POST ``{"data": ...}`` with the caller's ID token;
success is ``{"result": ...}``, failure ``{"error": {"status", "message"}}``.
The function creates the Auth accounts and membership records; its own
atomicity is outside the console's control.
"""

from __future__ import annotations

import logging

import httpx

from admin_console.application.dtos.company import ProvisioningResult
from admin_console.application.interfaces.services import TokenSource
from admin_console.domain.exceptions import UserProvisioningError
from admin_console.domain.value_objects import AccountCredentials
from admin_console.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def callable_function_url(
    project_id: str,
    function_name: str,
    region: str = "us-central1",
    base_url: str | None = None,
) -> str:
    """URL of a callable function (base_url overrides host, e.g. the emulator)."""
    if base_url:
        return f"{base_url.rstrip('/')}/{function_name}"
    return f"https://{region}-{project_id}.cloudfunctions.net/{function_name}"


def _backend_error(resp: httpx.Response) -> tuple[str | None, str | None]:
    """Return (status, operator-displayable message) from a callable error body."""
    try:
        body = resp.json()
    except ValueError:
        return None, None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, None
    message = error.get("message")
    return error.get("status"), message if isinstance(message, str) and message else None


class CallableFunctionProvisioner:
    """Implements IUserProvisioner against the ``createCompanyWithUsers`` function."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        token_source: TokenSource,
    ) -> None:
        self._http = http_client
        self._url = url
        self._token_source = token_source

    @traced("functions.create_company_users")
    async def create_company_users(
        self,
        company_id: str,
        admin: AccountCredentials,
        master: AccountCredentials | None,
    ) -> ProvisioningResult:
        payload = {
            "companyId": company_id,
            "admin": admin.to_payload(),
            "master": master.to_payload() if master is not None else None,
        }
        headers = {"Content-Type": "application/json"}
        token = await self._token_source()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = await self._http.post(self._url, json={"data": payload}, headers=headers)
        except httpx.HTTPError as exc:
            raise UserProvisioningError(None, company_id=company_id, status="UNAVAILABLE") from exc

        if resp.status_code != 200:
            status, message = _backend_error(resp)
            raise UserProvisioningError(
                message, company_id=company_id, status=status or str(resp.status_code)
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise UserProvisioningError(None, company_id=company_id, status="INTERNAL") from exc
        if isinstance(body, dict) and "error" in body:
            status, message = _backend_error(resp)
            raise UserProvisioningError(message, company_id=company_id, status=status)

        result = body.get("result") if isinstance(body, dict) else None
        logger.debug("Provisioning function result for company %s: %s", company_id, result)
        return ProvisioningResult(data=result)
