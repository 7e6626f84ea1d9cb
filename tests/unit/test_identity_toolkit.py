"""Tests for FirebaseIdentityClient (Identity Toolkit + Secure Token over httpx)."""

import json
from datetime import timedelta

import httpx
import pytest

from admin_console.domain.enums import SignInFailure
from admin_console.domain.exceptions import SignInError
from admin_console.infrastructure.firebase.services import FirebaseIdentityClient
from admin_console.infrastructure.firebase.services.identity_toolkit import (
    classify_sign_in_failure,
)
from admin_console.shared.utils.datetime import utc_now


def make_client(handler) -> FirebaseIdentityClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseIdentityClient(
        http,
        "web-key",
        identity_toolkit_url="http://auth.test/v1",
        secure_token_url="http://token.test/v1",
    )


def error_response(code: str) -> httpx.Response:
    return httpx.Response(400, json={"error": {"code": 400, "message": code}})


@pytest.mark.parametrize(
    "code,expected",
    [
        ("EMAIL_NOT_FOUND", SignInFailure.INVALID_CREDENTIALS),
        ("INVALID_PASSWORD", SignInFailure.INVALID_CREDENTIALS),
        ("INVALID_LOGIN_CREDENTIALS", SignInFailure.INVALID_CREDENTIALS),
        ("USER_DISABLED", SignInFailure.OTHER),
        (None, SignInFailure.OTHER),
    ],
)
def test_classify_sign_in_failure(code, expected) -> None:
    assert classify_sign_in_failure(code) is expected


async def test_sign_in_success() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/accounts:signInWithPassword"
        assert request.url.params["key"] == "web-key"
        body = json.loads(request.content)
        assert body == {"email": "a@x.com", "password": "secret1", "returnSecureToken": True}
        return httpx.Response(
            200,
            json={
                "localId": "uid-1",
                "email": "a@x.com",
                "idToken": "id-1",
                "refreshToken": "refresh-1",
                "expiresIn": "3600",
            },
        )

    identity = await make_client(handler).sign_in_with_password("a@x.com", "secret1")
    assert identity.uid == "uid-1"
    assert identity.id_token == "id-1"
    assert not identity.is_expired()


async def test_sign_in_invalid_credentials() -> None:
    with pytest.raises(SignInError) as exc_info:
        await make_client(lambda r: error_response("INVALID_PASSWORD")).sign_in_with_password(
            "a@x.com", "wrong1"
        )
    assert exc_info.value.failure is SignInFailure.INVALID_CREDENTIALS
    assert exc_info.value.provider_code == "INVALID_PASSWORD"


async def test_sign_in_code_with_detail_is_classified() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return error_response("TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled")

    with pytest.raises(SignInError) as exc_info:
        await make_client(handler).sign_in_with_password("a@x.com", "secret1")
    assert exc_info.value.failure is SignInFailure.OTHER
    assert exc_info.value.provider_code == "TOO_MANY_ATTEMPTS_TRY_LATER"


async def test_sign_in_network_error_is_other() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(SignInError) as exc_info:
        await make_client(handler).sign_in_with_password("a@x.com", "secret1")
    assert exc_info.value.failure is SignInFailure.OTHER


async def test_refresh_exchanges_refresh_token(identity_factory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url).startswith("http://token.test/v1/token")
        assert b"grant_type=refresh_token" in request.content
        return httpx.Response(
            200,
            json={
                "id_token": "id-2",
                "refresh_token": "refresh-2",
                "expires_in": "3600",
                "user_id": "uid-1",
            },
        )

    stale = identity_factory("uid-1", expires_at=utc_now() - timedelta(minutes=5))
    refreshed = await make_client(handler).refresh(stale)
    assert refreshed.id_token == "id-2"
    assert refreshed.refresh_token == "refresh-2"
    assert refreshed.uid == "uid-1"
    assert not refreshed.is_expired()


async def test_refresh_revoked_token(identity_factory) -> None:
    with pytest.raises(SignInError):
        await make_client(lambda r: error_response("TOKEN_EXPIRED")).refresh(identity_factory())
