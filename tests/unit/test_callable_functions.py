"""Tests for CallableFunctionProvisioner (callable protocol over httpx)."""

import json

import httpx
import pytest

from admin_console.domain.exceptions import UserProvisioningError
from admin_console.domain.value_objects import AccountCredentials
from admin_console.infrastructure.firebase.services import (
    CallableFunctionProvisioner,
    callable_function_url,
)

URL = "http://functions.test/createCompanyWithUsers"
ADMIN = AccountCredentials("a@x.com", "secret1")


async def token_source() -> str:
    return "id-token"


def make_provisioner(handler) -> CallableFunctionProvisioner:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CallableFunctionProvisioner(http, URL, token_source)


def test_callable_function_url() -> None:
    assert (
        callable_function_url("demo", "createCompanyWithUsers")
        == "https://us-central1-demo.cloudfunctions.net/createCompanyWithUsers"
    )
    assert (
        callable_function_url("demo", "fn", base_url="http://localhost:5001/demo/us-central1/")
        == "http://localhost:5001/demo/us-central1/fn"
    )


async def test_request_envelope_and_result() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"result": {"adminUid": "u1"}})

    result = await make_provisioner(handler).create_company_users("co1", ADMIN, None)

    assert seen["auth"] == "Bearer id-token"
    assert seen["body"] == {
        "data": {
            "companyId": "co1",
            "admin": {"email": "a@x.com", "password": "secret1"},
            "master": None,
        }
    }
    assert result.data == {"adminUid": "u1"}


async def test_master_account_included() -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"result": None})

    master = AccountCredentials("m@x.com", "secret2")
    await make_provisioner(handler).create_company_users("co1", ADMIN, master)
    assert bodies[0]["data"]["master"] == {"email": "m@x.com", "password": "secret2"}


async def test_backend_error_message_is_kept() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429,
            json={"error": {"status": "RESOURCE_EXHAUSTED", "message": "quota exceeded"}},
        )

    with pytest.raises(UserProvisioningError) as exc_info:
        await make_provisioner(handler).create_company_users("co1", ADMIN, None)
    assert exc_info.value.backend_message == "quota exceeded"
    assert exc_info.value.status == "RESOURCE_EXHAUSTED"
    assert exc_info.value.company_id == "co1"


async def test_error_without_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream failure")

    with pytest.raises(UserProvisioningError) as exc_info:
        await make_provisioner(handler).create_company_users("co1", ADMIN, None)
    assert exc_info.value.backend_message is None
    assert exc_info.value.status == "500"


async def test_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(UserProvisioningError) as exc_info:
        await make_provisioner(handler).create_company_users("co1", ADMIN, None)
    assert exc_info.value.status == "UNAVAILABLE"
