"""DTOs for identities issued by the identity provider."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from admin_console.shared.utils.datetime import utc_now

# Refresh slightly before expiry so a token is never sent already expired.
_EXPIRY_SKEW = timedelta(seconds=60)


@dataclass(frozen=True)
class Identity:
    """Signed-in identity (uid) plus the tokens used for backend calls."""

    uid: str
    email: str
    id_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utc_now()) >= self.expires_at - _EXPIRY_SKEW
