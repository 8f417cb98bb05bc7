"""Display formatting, document numbers and email body sanitization."""

import re
from datetime import datetime, timezone

import pytest

from app.shared.utils.formatting import (
    format_company_address,
    format_currency,
    format_long_date,
    or_na,
)
from app.shared.utils.generators import (
    generate_cost_estimate_password,
    generate_cuid,
    generate_job_order_number,
    generate_quotation_number,
    generate_sa_number,
    receivable_numbers,
)
from app.shared.utils.sanitization import EmailBodySanitizer, split_addresses

NOW = datetime(2024, 3, 5, 10, 0, 0, tzinfo=timezone.utc)


def test_format_long_date() -> None:
    assert format_long_date(NOW) == "March 5, 2024"
    assert format_long_date(None) == "N/A"


def test_format_currency() -> None:
    assert format_currency(1234.5) == "PHP 1,234.50"
    assert format_currency(None) == "PHP 0.00"


def test_format_company_address_accepts_nested_and_flat_documents() -> None:
    nested = {"address": {"street": "1 Ayala Ave", "city": "Makati", "province": "Metro Manila"}}
    assert format_company_address(nested) == "1 Ayala Ave, Makati, Metro Manila"
    assert format_company_address({"address": "Somewhere"}) == "Somewhere"
    assert format_company_address({"city": "Pasig", "zipCode": "1600"}) == "Pasig, 1600"
    assert format_company_address(None) == ""


def test_or_na() -> None:
    assert or_na("  ") == "N/A"
    assert or_na(0) == "0"


def test_dated_numbers_use_the_date_and_last_four_millis() -> None:
    millis = str(int(NOW.timestamp() * 1000))[-4:]
    assert generate_quotation_number(NOW) == f"QT-20240305-{millis}"
    assert generate_job_order_number(NOW) == f"JO-20240305-{millis}"


def test_sa_number_and_password_shapes() -> None:
    assert re.fullmatch(r"SA-\d{6}", generate_sa_number())
    assert re.fullmatch(r"[A-Z0-9]{8}", generate_cost_estimate_password())


def test_cuids_are_unique() -> None:
    assert len({generate_cuid() for _ in range(50)}) == 50


def test_receivable_numbers_use_the_document_tail() -> None:
    numbers = receivable_numbers("QT-20240305-1234", "abcdWXYZ", NOW)
    assert numbers["invoice_no"] == "INV-QT-20240305-1234-WXYZ"
    assert numbers["booking_no"] == "BK-QT-20240305-1234-WXYZ"
    assert numbers["or_no"].startswith("OR-") and numbers["or_no"].endswith("-WXYZ")


def test_email_body_keeps_line_breaks_and_strips_scripts() -> None:
    html = EmailBodySanitizer.to_html("Hello<script>alert(1)</script>\nSee <b>attached</b>")
    assert "<script>" not in html
    assert "<br>" in html
    assert "<b>attached</b>" in html


@pytest.mark.parametrize(
    ("value", "valid"),
    [("a@b.co", True), ("first.last@example.com", True), ("no-at.example.com", False), ("a@b", False), ("a b@c.d", False), ("", False)],
)
def test_is_valid_email(value: str, valid: bool) -> None:
    assert EmailBodySanitizer.is_valid_email(value) is valid


def test_split_addresses() -> None:
    assert split_addresses(" a@x.com, ,b@y.com ") == ["a@x.com", "b@y.com"]
    assert split_addresses(None) == []
