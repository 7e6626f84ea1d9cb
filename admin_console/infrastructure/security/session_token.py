"""Signed session cookie tokens.

The cookie carries only the opaque console session id (claim ``sid``)
plus an expiry; identity tokens stay server-side.
Uses admin_console.core.config for secret and algorithm.
"""

from datetime import UTC, datetime, timedelta
from typing import cast

from jose import JWTError, jwt

from admin_console.core.config import get_settings


def create_session_token(session_id: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed token for the session cookie.

    Args:
        session_id: Console session id.
        expires_delta: Optional TTL; else uses settings.session_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_expire_minutes)
    claims = {"sid": session_id, "exp": datetime.now(UTC) + expires_delta}
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def read_session_token(token: str | None) -> str | None:
    """Return the session id from a cookie token, or None if missing, tampered or expired."""
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True},
        )
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) and sid else None
