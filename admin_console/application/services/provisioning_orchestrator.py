"""Company provisioning: company record first, then the company's users.

The two steps are not atomic. When user provisioning fails after the
company record was written, the record stays in the store (no automatic
compensation) and the orchestrator reports it as orphaned so an operator
can retry or remove it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from admin_console.application.dtos.company import ProvisioningOutcome
from admin_console.application.interfaces.repositories import ICompanyRepository
from admin_console.application.interfaces.services import IUserProvisioner
from admin_console.core import messages
from admin_console.domain.enums import CompanyStatus, SubmissionState
from admin_console.domain.exceptions import RecordStoreError, UserProvisioningError
from admin_console.domain.validators import can_submit, normalize_digits
from admin_console.domain.value_objects import CompanyForm
from admin_console.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

logger = logging.getLogger(__name__)

OrphanedCompanyHook = Callable[[str, Exception], None]


class ProvisioningOrchestrator:
    """Runs one provisioning attempt at a time for a console session.

    States: IDLE -> SUBMITTING -> {SUCCESS, ERROR}. A submit while
    SUBMITTING is ignored; SUCCESS and ERROR accept the next submission.
    """

    def __init__(
        self,
        company_repo: ICompanyRepository,
        user_provisioner: IUserProvisioner,
        *,
        classification: str = "INVENTORY_CONTRACTOR",
        strict_tax_id: bool = False,
        on_orphaned_company: OrphanedCompanyHook | None = None,
    ) -> None:
        self.company_repo = company_repo
        self.user_provisioner = user_provisioner
        self.classification = classification
        self.strict_tax_id = strict_tax_id
        self.on_orphaned_company = on_orphaned_company
        self._state = SubmissionState.IDLE

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state is SubmissionState.SUBMITTING

    async def submit(self, form: CompanyForm) -> ProvisioningOutcome | None:
        """Validate and run the two-step creation.

        Returns None (and does nothing) while another attempt is in flight.
        An invalid form yields an ERROR outcome without any remote call and
        without leaving the current state.
        """
        if self.is_submitting:
            logger.info("Provisioning submit ignored: an attempt is already in flight")
            return None

        if not can_submit(form, strict_tax_id=self.strict_tax_id):
            return ProvisioningOutcome(
                state=SubmissionState.ERROR,
                message=messages.FORM_INVALID,
                form=form,
            )

        self._state = SubmissionState.SUBMITTING
        outcome = ProvisioningOutcome(
            state=SubmissionState.ERROR,
            message=messages.PROVISIONING_FALLBACK,
            form=form,
        )
        try:
            outcome = await self._provision(form)
        finally:
            self._state = outcome.state
        return outcome

    @traced("provisioning.provision_company")
    async def _provision(self, form: CompanyForm) -> ProvisioningOutcome:
        # Step 1: company record; the store assigns the id.
        try:
            company = await self.company_repo.create_company(
                name=form.company_name.strip(),
                tax_id=normalize_digits(form.tax_id),
                status=CompanyStatus.ACTIVE,
                classification=self.classification,
            )
        except RecordStoreError as exc:
            logger.warning("Company creation failed; no users requested: %s", exc.message)
            return ProvisioningOutcome(
                state=SubmissionState.ERROR,
                message=messages.COMPANY_CREATION_FAILED,
                form=form,
            )
        except Exception:
            logger.exception("Company creation raised unexpectedly; no users requested")
            return ProvisioningOutcome(
                state=SubmissionState.ERROR,
                message=messages.COMPANY_CREATION_FAILED,
                form=form,
            )

        company_id = company.id
        add_span_attributes(**{"company.id": company_id})

        # Step 2: users, which needs the id generated in step 1.
        master = form.master_credentials()
        try:
            result = await self.user_provisioner.create_company_users(
                company_id=company_id,
                admin=form.admin_credentials(),
                master=master,
            )
        except Exception as exc:
            return self._orphaned(form, company_id, exc)

        logger.info(
            "Company %s provisioned (master account: %s)",
            company_id,
            "yes" if master is not None else "no",
        )
        return ProvisioningOutcome(
            state=SubmissionState.SUCCESS,
            message=messages.company_created(company_id),
            form=CompanyForm(),
            company_id=company_id,
            backend_result=result.data,
        )

    def _orphaned(
        self, form: CompanyForm, company_id: str, exc: Exception
    ) -> ProvisioningOutcome:
        """Report a step-2 failure; the company record is deliberately left in place."""
        if isinstance(exc, UserProvisioningError):
            logger.warning(
                "Company %s created but user provisioning failed (%s): %s",
                company_id,
                exc.status or "no status",
                exc.message,
            )
            message = exc.backend_message or messages.PROVISIONING_FALLBACK
        else:
            logger.exception(
                "Company %s created but user provisioning raised unexpectedly", company_id
            )
            message = messages.PROVISIONING_FALLBACK

        add_span_event("company.orphaned", {"company.id": company_id})
        if self.on_orphaned_company is not None:
            try:
                self.on_orphaned_company(company_id, exc)
            except Exception:
                logger.exception("Orphaned-company hook failed for company %s", company_id)

        return ProvisioningOutcome(
            state=SubmissionState.ERROR,
            message=message,
            form=form,
            company_id=company_id,
            orphaned_company_id=company_id,
        )
