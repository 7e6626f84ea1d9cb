"""Tests for the signed session cookie token."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from admin_console.infrastructure.security.session_token import (
    create_session_token,
    read_session_token,
)


def test_round_trip() -> None:
    token = create_session_token("session-1")
    assert read_session_token(token) == "session-1"


def test_token_signed_with_other_key_is_rejected() -> None:
    forged = jwt.encode(
        {"sid": "session-1", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "some-other-key",
        algorithm="HS256",
    )
    assert read_session_token(forged) is None


def test_expired_token_is_rejected() -> None:
    token = create_session_token("session-1", expires_delta=timedelta(seconds=-1))
    assert read_session_token(token) is None


def test_missing_token() -> None:
    assert read_session_token(None) is None
    assert read_session_token("") is None
    assert read_session_token("not-a-jwt") is None
