"""Firebase Authentication over REST (Identity Toolkit + Secure Token APIs).

Implements IIdentityClient. Failures are classified from the provider's
error code (``error.message``), never from free text.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import httpx

from admin_console.application.dtos.identity import Identity
from admin_console.domain.enums import SignInFailure
from admin_console.domain.exceptions import SignInError
from admin_console.shared.telemetry.tracing import traced
from admin_console.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
DEFAULT_SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1"

# Codes meaning "wrong e-mail or password". INVALID_LOGIN_CREDENTIALS replaces
# the first two when e-mail enumeration protection is on.
INVALID_CREDENTIAL_CODES = frozenset(
    {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS"}
)


def _error_code(resp: httpx.Response) -> str | None:
    """Extract the provider code, e.g. 'TOO_MANY_ATTEMPTS_TRY_LATER : detail' -> first token."""
    try:
        body = resp.json()
    except ValueError:
        return None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if not isinstance(message, str) or not message:
        return None
    return message.split(":", 1)[0].strip()


def classify_sign_in_failure(code: str | None) -> SignInFailure:
    if code in INVALID_CREDENTIAL_CODES:
        return SignInFailure.INVALID_CREDENTIALS
    return SignInFailure.OTHER


class FirebaseIdentityClient:
    """Email/password sign-in and token refresh for Firebase Authentication."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        identity_toolkit_url: str = DEFAULT_IDENTITY_TOOLKIT_URL,
        secure_token_url: str = DEFAULT_SECURE_TOKEN_URL,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._identity_toolkit_url = identity_toolkit_url.rstrip("/")
        self._secure_token_url = secure_token_url.rstrip("/")

    @traced("firebase_auth.sign_in_with_password")
    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Sign in; raise SignInError classified from the provider's error code."""
        try:
            resp = await self._http.post(
                f"{self._identity_toolkit_url}/accounts:signInWithPassword",
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as exc:
            logger.warning("Identity Toolkit unreachable: %s", exc)
            raise SignInError(SignInFailure.OTHER, "NETWORK_ERROR") from exc

        if resp.status_code != 200:
            code = _error_code(resp)
            raise SignInError(classify_sign_in_failure(code), code)

        body = resp.json()
        return Identity(
            uid=body["localId"],
            email=body.get("email", email),
            id_token=body["idToken"],
            refresh_token=body["refreshToken"],
            expires_at=utc_now() + timedelta(seconds=int(body.get("expiresIn", 3600))),
        )

    @traced("firebase_auth.refresh")
    async def refresh(self, identity: Identity) -> Identity:
        """Exchange the refresh token for a new ID token.

        Raises SignInError when the token is revoked or the account disabled.
        """
        try:
            resp = await self._http.post(
                f"{self._secure_token_url}/token",
                params={"key": self._api_key},
                data={"grant_type": "refresh_token", "refresh_token": identity.refresh_token},
            )
        except httpx.HTTPError as exc:
            logger.warning("Secure Token API unreachable: %s", exc)
            raise SignInError(SignInFailure.OTHER, "NETWORK_ERROR") from exc
        if resp.status_code != 200:
            code = _error_code(resp)
            raise SignInError(SignInFailure.OTHER, code)

        body = resp.json()
        return Identity(
            uid=body.get("user_id", identity.uid),
            email=identity.email,
            id_token=body["id_token"],
            refresh_token=body.get("refresh_token", identity.refresh_token),
            expires_at=utc_now() + timedelta(seconds=int(body.get("expires_in", 3600))),
        )
