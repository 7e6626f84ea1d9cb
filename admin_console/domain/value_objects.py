"""Value objects: operator form input and normalized account credentials."""

from __future__ import annotations

from dataclasses import dataclass, field

from admin_console.domain.validators import normalize_email


@dataclass(frozen=True)
class AccountCredentials:
    """E-mail/password pair sent to the provisioning operation.

    Build with ``from_input`` so the e-mail is always trimmed and lower-cased.
    """

    email: str
    password: str = field(repr=False)

    @classmethod
    def from_input(cls, email: str, password: str) -> AccountCredentials:
        return cls(email=normalize_email(email), password=password)

    def to_payload(self) -> dict[str, str]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class CompanyForm:
    """Provisioning form as typed by the operator (raw, not normalized).

    Immutable: every field change produces a new form, so anything derived
    from it (``can_submit``) is recomputed on each change.
    """

    company_name: str = ""
    tax_id: str = ""
    admin_email: str = ""
    admin_password: str = field(default="", repr=False)
    create_master: bool = False
    master_email: str = ""
    master_password: str = field(default="", repr=False)

    def admin_credentials(self) -> AccountCredentials:
        return AccountCredentials.from_input(self.admin_email, self.admin_password)

    def master_credentials(self) -> AccountCredentials | None:
        """Master account, or None when the operator did not opt in."""
        if not self.create_master:
            return None
        return AccountCredentials.from_input(self.master_email, self.master_password)
