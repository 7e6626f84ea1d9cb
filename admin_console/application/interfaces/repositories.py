"""Repository interfaces (ports) for the record store and admin registry.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from admin_console.domain.enums import CompanyStatus

if TYPE_CHECKING:
    from admin_console.application.dtos.company import CompanyResult


class ICompanyRepository(Protocol):
    """Protocol for the company record store."""

    async def create_company(
        self,
        name: str,
        tax_id: str,
        status: CompanyStatus,
        classification: str,
    ) -> CompanyResult:
        """Create a company with a store-generated id and server timestamp.

        Raises RecordStoreError on authorization or connectivity problems.
        """


class IAdminRegistry(Protocol):
    """Protocol for the administrators registry (keyed by identity uid)."""

    async def is_admin(self, uid: str) -> bool:
        """Return True iff uid is registered. May raise on lookup failure."""
