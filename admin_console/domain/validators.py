"""Field validators for the provisioning and sign-in forms.

Pure, synchronous, total functions over text input: no I/O and no
exceptions for any string argument.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from admin_console.domain.value_objects import CompanyForm

TAX_ID_LENGTH = 14
MIN_PASSWORD_LENGTH = 6

_NON_DIGITS = re.compile(r"\D")
_EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_CNPJ_FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def normalize_digits(value: str) -> str:
    """Strip every non-digit character (idempotent)."""
    return _NON_DIGITS.sub("", value)


def normalize_email(value: str) -> str:
    """Trim and lower-case an e-mail before it leaves the console."""
    return value.strip().lower()


def is_valid_tax_id(raw: str) -> bool:
    """True iff the digits of ``raw`` form a 14-digit CNPJ (length only)."""
    return len(normalize_digits(raw)) == TAX_ID_LENGTH


def _check_digit(digits: str, weights: tuple[int, ...]) -> int:
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def has_valid_cnpj_check_digits(raw: str) -> bool:
    """Full CNPJ verification: length plus both modulus-11 check digits.

    Repeated-digit sequences ("00000000000000", ...) pass the arithmetic
    but are not issued, so they are rejected.
    """
    digits = normalize_digits(raw)
    if len(digits) != TAX_ID_LENGTH or len(set(digits)) == 1:
        return False
    first = _check_digit(digits[:12], _CNPJ_FIRST_WEIGHTS)
    second = _check_digit(digits[:12] + str(first), _CNPJ_SECOND_WEIGHTS)
    return digits[12:] == f"{first}{second}"


def is_valid_email(value: str) -> bool:
    """General ``local@domain.tld`` shape after trimming (not RFC 5322)."""
    return bool(_EMAIL_SHAPE.match(value.strip()))


def is_valid_password(value: str) -> bool:
    return len(value) >= MIN_PASSWORD_LENGTH


def tax_id_problem(raw: str, strict: bool = False) -> str | None:
    """Return "length" or "check_digits" for a non-empty invalid tax id, else None."""
    if not raw:
        return None
    if not is_valid_tax_id(raw):
        return "length"
    if strict and not has_valid_cnpj_check_digits(raw):
        return "check_digits"
    return None


def can_submit(form: CompanyForm, strict_tax_id: bool = False) -> bool:
    """Aggregate check that gates the submit action.

    Master fields are only inspected when ``create_master`` is set.
    """
    if not form.company_name.strip():
        return False
    if not is_valid_tax_id(form.tax_id):
        return False
    if strict_tax_id and not has_valid_cnpj_check_digits(form.tax_id):
        return False
    if not is_valid_email(form.admin_email):
        return False
    if not is_valid_password(form.admin_password):
        return False
    if form.create_master:
        if not is_valid_email(form.master_email):
            return False
        if not is_valid_password(form.master_password):
            return False
    return True
