"""Firestore-backed implementations of the record store and admin registry ports."""

from admin_console.infrastructure.firebase.repositories.admin_registry_firestore import (
    FirestoreAdminRegistry,
)
from admin_console.infrastructure.firebase.repositories.company_repo_firestore import (
    FirestoreCompanyRepository,
)

__all__ = [
    "FirestoreAdminRegistry",
    "FirestoreCompanyRepository",
]
