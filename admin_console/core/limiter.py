"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and the screen routes can use the
same instance without circular imports. Limit strings live here only.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
PROVISIONING_LIMIT = "20/minute"

limit_sign_in = limiter.limit(LOGIN_LIMIT)
limit_provisioning = limiter.limit(PROVISIONING_LIMIT)
