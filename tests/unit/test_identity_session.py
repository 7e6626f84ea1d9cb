"""Tests for IdentitySession: subscription delivery, sign-out and token refresh."""

from datetime import timedelta

from admin_console.application.services.authorization_gate import AuthorizationGate
from admin_console.application.services.identity_session import IdentitySession
from admin_console.domain.enums import GateState
from admin_console.shared.utils.datetime import utc_now


async def test_subscribe_delivers_current_identity(identity_client, identity_factory) -> None:
    identity = identity_factory("uid-1")
    session = IdentitySession(identity_client, identity)
    received = []

    async def listener(value):
        received.append(value)

    await session.subscribe(listener)
    assert received == [identity]


async def test_unsubscribe_is_idempotent(identity_client, identity_factory) -> None:
    session = IdentitySession(identity_client, identity_factory())
    received = []

    async def listener(value):
        received.append(value)

    unsubscribe = await session.subscribe(listener)
    unsubscribe()
    unsubscribe()
    await session.sign_out()
    assert session.listener_count == 0
    assert len(received) == 1


async def test_sign_out_notifies_with_none(identity_client, identity_factory) -> None:
    session = IdentitySession(identity_client, identity_factory())
    received = []

    async def listener(value):
        received.append(value)

    await session.subscribe(listener)
    await session.sign_out()
    await session.sign_out()
    assert received[-1] is None
    assert len(received) == 2
    assert session.current is None


async def test_failing_listener_does_not_block_others(identity_client, identity_factory) -> None:
    session = IdentitySession(identity_client, identity_factory())
    received = []

    async def broken(value):
        raise RuntimeError("listener broke")

    async def listener(value):
        received.append(value)

    await session.subscribe(broken)
    await session.subscribe(listener)
    await session.sign_out()
    assert received[-1] is None


async def test_get_id_token_returns_current_token(identity_client, identity_factory) -> None:
    session = IdentitySession(identity_client, identity_factory("uid-1"))
    assert await session.get_id_token() == "id-token-uid-1"
    assert identity_client.refresh_calls == 0


async def test_get_id_token_refreshes_expired_token(identity_client, identity_factory) -> None:
    expired = identity_factory("uid-1", expires_at=utc_now() - timedelta(minutes=1))
    session = IdentitySession(identity_client, expired)
    assert await session.get_id_token() == "id-token-fresh"
    assert identity_client.refresh_calls == 1
    assert session.current.id_token == "id-token-fresh"


async def test_refresh_with_new_uid_notifies_listeners(identity_client, identity_factory) -> None:
    expired = identity_factory("uid-1", expires_at=utc_now() - timedelta(minutes=1))
    identity_client.refreshed_identity = identity_factory("uid-2")
    session = IdentitySession(identity_client, expired)
    received = []

    async def listener(value):
        received.append(value)

    await session.subscribe(listener)
    await session.get_id_token()
    assert [i.uid for i in received] == ["uid-1", "uid-2"]


async def test_get_id_token_signed_out(identity_client) -> None:
    assert await IdentitySession(identity_client).get_id_token() is None


async def test_refresh_with_same_uid_keeps_gate_settled(
    identity_client, admin_registry, identity_factory
) -> None:
    expired = identity_factory("uid-admin", expires_at=utc_now() - timedelta(minutes=1))
    session = IdentitySession(identity_client, expired)
    gate = AuthorizationGate(session, admin_registry)
    await gate.start()
    reads = len(admin_registry.calls)

    assert await session.get_id_token() == "id-token-fresh"
    assert gate.state is GateState.ALLOWED
    assert len(admin_registry.calls) == reads
