"""Firebase integration over REST: Firestore, Identity Toolkit, callable Functions."""

from admin_console.infrastructure.firebase.client import build_firestore_client

__all__ = ["build_firestore_client"]
