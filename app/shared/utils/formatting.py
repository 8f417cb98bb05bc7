"""Display formatting shared by PDFs and email templates."""

from collections.abc import Mapping
from typing import Any

from app.domain.billing import Number, as_date, quantize_money
from app.shared.utils.datetime import coerce_datetime

NOT_AVAILABLE = "N/A"


def format_long_date(value: Any) -> str:
    """Format a stored date as "January 1, 2024" in the business timezone; "N/A" if unreadable."""
    dt = coerce_datetime(value)
    if dt is None:
        return NOT_AVAILABLE
    day = as_date(dt)
    return f"{day:%B} {day.day}, {day.year}"


def format_currency(amount: Number | None, currency: str = "PHP") -> str:
    """Format an amount as "PHP 1,234.50"."""
    if amount is None:
        amount = 0
    return f"{currency} {quantize_money(amount):,.2f}"


def format_company_address(company: Mapping[str, Any] | None) -> str:
    """Join street, city, province and zip of a company document with ", "."""
    if not company:
        return ""
    address = company.get("address")
    if isinstance(address, Mapping):
        source = address
    elif isinstance(address, str):
        return address
    else:
        source = company
    parts = [
        source.get("street"),
        source.get("city"),
        source.get("province"),
        source.get("zip") or source.get("zipCode"),
    ]
    return ", ".join(str(p).strip() for p in parts if p and str(p).strip())


def or_na(value: Any) -> str:
    """Return the value as text, or "N/A" for empty values (broken references)."""
    if value is None:
        return NOT_AVAILABLE
    text = str(value).strip()
    return text or NOT_AVAILABLE
