"""Firestore-backed company repository (implements ICompanyRepository)."""

from __future__ import annotations

import logging

import httpx

from admin_console.application.dtos.company import CompanyResult
from admin_console.domain.enums import CompanyStatus
from admin_console.domain.exceptions import RecordStoreError
from admin_console.infrastructure.firebase._rest_client import (
    SERVER_TIMESTAMP,
    DocumentExistsError,
    FirestoreRequestError,
    FirestoreRESTClient,
)
from admin_console.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

# Auto IDs collide only by accident; one fresh ID is enough.
_CREATE_ATTEMPTS = 2


class FirestoreCompanyRepository:
    """Company records in Firestore. Field names match what the mobile apps read."""

    def __init__(self, client: FirestoreRESTClient, collection: str = "companies") -> None:
        self._client = client
        self._coll = client.collection(collection)

    @traced("firestore.create_company")
    async def create_company(
        self,
        name: str,
        tax_id: str,
        status: CompanyStatus,
        classification: str,
    ) -> CompanyResult:
        """Create a company under a generated ID with a server-side createdAt."""
        data = {
            "name": name,
            "cnpj": tax_id,
            "status": status.value,
            "classification": classification,
            "createdAt": SERVER_TIMESTAMP,
        }
        for attempt in range(1, _CREATE_ATTEMPTS + 1):
            try:
                result = await self._coll.add(data)
                break
            except DocumentExistsError:
                logger.warning("Company auto ID collision (attempt %s); retrying", attempt)
                if attempt == _CREATE_ATTEMPTS:
                    raise RecordStoreError("Could not allocate a company ID", 409) from None
            except FirestoreRequestError as exc:
                raise RecordStoreError(exc.message, exc.status_code) from exc
            except httpx.HTTPError as exc:
                raise RecordStoreError(f"Record store unreachable: {exc}") from exc

        return CompanyResult(
            id=result.document_id,
            name=name,
            tax_id=tax_id,
            status=status,
            classification=classification,
            created_at=result.server_timestamps.get("createdAt") or result.update_time,
        )
