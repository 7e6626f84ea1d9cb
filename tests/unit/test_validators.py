"""Tests for form field validators and the can_submit aggregate."""

import pytest

from admin_console.domain.validators import (
    can_submit,
    has_valid_cnpj_check_digits,
    is_valid_email,
    is_valid_password,
    is_valid_tax_id,
    normalize_digits,
    normalize_email,
    tax_id_problem,
)
from admin_console.domain.value_objects import CompanyForm

VALID_FORM = CompanyForm(
    company_name="Acme",
    tax_id="12.345.678/0001-90",
    admin_email="a@x.com",
    admin_password="secret1",
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12.345.678/0001-90", "12345678000190"),
        ("abc", ""),
        ("", ""),
        ("1a2b3", "123"),
    ],
)
def test_normalize_digits(raw: str, expected: str) -> None:
    assert normalize_digits(raw) == expected


def test_normalize_digits_is_idempotent() -> None:
    for raw in ["12.345.678/0001-90", " 1 2 ", "x", ""]:
        once = normalize_digits(raw)
        assert normalize_digits(once) == once


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email("  A@X.COM ") == "a@x.com"
    assert normalize_email(normalize_email(" B@y.Io")) == "b@y.io"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12.345.678/0001-90", True),
        ("12345678000190", True),
        ("1234567800019", False),
        ("123456780001901", False),
        ("", False),
        ("abcdefghijklmn", False),
    ],
)
def test_is_valid_tax_id_counts_digits_only(raw: str, expected: bool) -> None:
    assert is_valid_tax_id(raw) is expected
    assert is_valid_tax_id(raw) == (len(normalize_digits(raw)) == 14)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("a@x.com", True),
        ("  a@x.com  ", True),
        ("a@x", False),
        ("a x@y.com", False),
        ("@x.com", False),
        ("", False),
    ],
)
def test_is_valid_email(value: str, expected: bool) -> None:
    assert is_valid_email(value) is expected


def test_is_valid_password_requires_six_characters() -> None:
    assert is_valid_password("123456")
    assert not is_valid_password("12345")
    assert not is_valid_password("")


def test_cnpj_check_digits() -> None:
    assert has_valid_cnpj_check_digits("11.222.333/0001-81")
    assert not has_valid_cnpj_check_digits("11.222.333/0001-82")
    assert not has_valid_cnpj_check_digits("00000000000000")
    assert not has_valid_cnpj_check_digits("1122233300018")


def test_tax_id_problem() -> None:
    assert tax_id_problem("") is None
    assert tax_id_problem("123") == "length"
    assert tax_id_problem("11222333000182") is None
    assert tax_id_problem("11222333000182", strict=True) == "check_digits"
    assert tax_id_problem("11222333000181", strict=True) is None


def test_can_submit_accepts_complete_form() -> None:
    assert can_submit(VALID_FORM)


def test_can_submit_rejects_short_tax_id() -> None:
    form = CompanyForm(
        company_name="Acme",
        tax_id="1234567800019",
        admin_email="a@x.com",
        admin_password="secret1",
    )
    assert not can_submit(form)


def test_can_submit_rejects_blank_company_name() -> None:
    assert not can_submit(
        CompanyForm(
            company_name="   ",
            tax_id=VALID_FORM.tax_id,
            admin_email=VALID_FORM.admin_email,
            admin_password=VALID_FORM.admin_password,
        )
    )


def test_can_submit_ignores_master_fields_unless_enabled() -> None:
    form = CompanyForm(
        company_name="Acme",
        tax_id=VALID_FORM.tax_id,
        admin_email="a@x.com",
        admin_password="secret1",
        create_master=False,
        master_email="not-an-email",
        master_password="1",
    )
    assert can_submit(form)


def test_can_submit_checks_master_fields_when_enabled() -> None:
    base = dict(
        company_name="Acme",
        tax_id=VALID_FORM.tax_id,
        admin_email="a@x.com",
        admin_password="secret1",
        create_master=True,
    )
    assert not can_submit(CompanyForm(**base, master_email="m@x", master_password="secret1"))
    assert not can_submit(CompanyForm(**base, master_email="m@x.com", master_password="12"))
    assert can_submit(CompanyForm(**base, master_email="m@x.com", master_password="secret1"))


def test_can_submit_strict_mode_requires_check_digits() -> None:
    form = CompanyForm(
        company_name="Acme",
        tax_id="11.222.333/0001-82",
        admin_email="a@x.com",
        admin_password="secret1",
    )
    assert can_submit(form)
    assert not can_submit(form, strict_tax_id=True)
