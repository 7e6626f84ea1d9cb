"""DTOs for the company provisioning workflow."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from admin_console.domain.enums import CompanyStatus, SubmissionState
from admin_console.domain.value_objects import CompanyForm


@dataclass(frozen=True)
class CompanyResult:
    """Company record as written to the record store."""

    id: str
    name: str
    tax_id: str
    status: CompanyStatus
    classification: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProvisioningResult:
    """Opaque success payload of the user-provisioning operation."""

    data: Any = None


@dataclass(frozen=True)
class ProvisioningOutcome:
    """What one submission attempt reports back to the operator.

    ``form`` is the form to show next: empty after SUCCESS, the submitted
    form after ERROR. ``orphaned_company_id`` is set when the company
    record was created but its users were not.
    """

    state: SubmissionState
    message: str
    form: CompanyForm = field(default_factory=CompanyForm)
    company_id: str | None = None
    orphaned_company_id: str | None = None
    backend_result: Any = None

    @property
    def succeeded(self) -> bool:
        return self.state is SubmissionState.SUCCESS
