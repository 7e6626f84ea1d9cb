"""Grant console access to a Firebase user (adds admins/{uid}).

Usage:
    uv run python -m scripts.grant_admin <uid> [email]
Needs FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
All imports use admin_console.*.
"""

import asyncio
import sys

import httpx

from admin_console.core.config import get_settings
from admin_console.infrastructure.firebase import build_firestore_client
from admin_console.infrastructure.firebase.repositories import FirestoreAdminRegistry


async def main() -> None:
    """Create the admin marker document for uid."""
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.grant_admin <uid> [email]",
            file=sys.stderr,
        )
        sys.exit(1)
    uid = sys.argv[1]
    email = sys.argv[2] if len(sys.argv) > 2 else None

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http_client:
        client = build_firestore_client(settings, http_client)
        if client is None:
            print("Firestore not configured", file=sys.stderr)
            sys.exit(1)
        registry = FirestoreAdminRegistry(client, settings.admins_collection)
        if await registry.grant(uid, email):
            print(f"Granted console access to {uid}")
        else:
            print(f"{uid} already has console access")


if __name__ == "__main__":
    asyncio.run(main())
