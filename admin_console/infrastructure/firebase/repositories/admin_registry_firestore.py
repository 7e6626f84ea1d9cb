"""Firestore-backed administrators registry (implements IAdminRegistry).

An identity is an administrator iff ``admins/{uid}`` exists. Errors are
raised to the caller; the authorization gate turns them into a denial.
"""

from __future__ import annotations

from admin_console.infrastructure.firebase._rest_client import FirestoreRESTClient
from admin_console.shared.telemetry.tracing import traced
from admin_console.shared.utils.datetime import utc_now


class FirestoreAdminRegistry:
    """Admin lookup by document existence."""

    def __init__(self, client: FirestoreRESTClient, collection: str = "admins") -> None:
        self._client = client
        self._coll = client.collection(collection)

    @traced("firestore.is_admin")
    async def is_admin(self, uid: str) -> bool:
        if not uid or "/" in uid:
            return False
        return await self._coll.document(uid).get() is not None

    async def grant(self, uid: str, email: str | None = None) -> bool:
        """Register uid as administrator. Returns False if it already was one."""
        if await self.is_admin(uid):
            return False
        await self._coll.document(uid).create({"email": email, "grantedAt": utc_now()})
        return True
