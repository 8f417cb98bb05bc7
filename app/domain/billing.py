"""Billing rules: prorated monthly pricing, quotation totals, VAT, and duration phrases.

All money arithmetic uses Decimal. Floats coming from Firestore are converted
through their string form so that 1234.56 stays 1234.56.

The monthly rate of a site is fixed regardless of how many days a calendar
month has, so the effective daily rate differs between months of the same
contract. Prorating therefore works month by month.
"""

from __future__ import annotations

import calendar
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from app.core.config import get_settings
from app.domain.exceptions import ValidationException

VAT_RATE = Decimal("0.12")
DAYS_PER_BILLING_MONTH = 30

_CENTS = Decimal("0.01")

Number = Decimal | int | float | str


@dataclass(frozen=True)
class VatBreakdown:
    """Subtotal, VAT and grand total of a priced document."""

    subtotal: Decimal
    vat: Decimal
    total: Decimal


@dataclass(frozen=True)
class QuotationTotals:
    """Result of calculate_quotation_total: one total per item plus the sum."""

    duration_days: int
    item_totals: list[Decimal]
    total_amount: Decimal


def to_decimal(value: Number | None) -> Decimal:
    """Convert a stored amount to Decimal. None and blank strings are zero."""
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Number) -> Decimal:
    """Round to centavos (half up) for display and documents."""
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def as_date(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar date of a date or datetime.

    Aware datetimes are read in ``tz`` (default: the business timezone from
    settings). Local midnight in Manila is stored as 16:00Z of the previous day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or get_settings().business_tz)
        return value.date()
    return value


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given calendar month."""
    return calendar.monthrange(year, month)[1]


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def _add_months(day: date, months: int) -> date:
    """Move ``day`` forward by whole months, clamping to the last day (Jan 31 + 1 = Feb 29)."""
    year, month = divmod(day.month - 1 + months, 12)
    year += day.year
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def calculate_prorated_price(
    monthly_rate: Number,
    start_date: date | datetime,
    end_date: date | datetime,
) -> Decimal:
    """Price a booking from start_date to end_date inclusive at a fixed monthly rate.

    Each calendar month touched by the interval contributes
    ``monthly_rate * covered_days / days_in_that_month``. The first and last
    months are clamped to the start and end days; months in between count in
    full. A booking inside one month goes through the same loop.

    Args:
        monthly_rate: Price of one full calendar month.
        start_date: First billed day.
        end_date: Last billed day (inclusive).

    Returns:
        The prorated total. Zero when end_date is before start_date.

    Raises:
        ValidationException: If monthly_rate is negative.
    """
    rate = to_decimal(monthly_rate)
    if rate < 0:
        raise ValidationException("Monthly rate cannot be negative", field="monthly_rate")
    start = as_date(start_date)
    end = as_date(end_date)

    total = Decimal(0)
    current = start
    while current <= end:
        month_days = days_in_month(current.year, current.month)
        in_start_month = (current.year, current.month) == (start.year, start.month)
        in_end_month = (current.year, current.month) == (end.year, end.month)
        first_day = start.day if in_start_month else 1
        last_day = end.day if in_end_month else month_days
        # multiply before dividing so a full month returns the rate exactly
        total += rate * (last_day - first_day + 1) / month_days
        current = _first_of_next_month(current)
    return total


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _months_and_days(days: int) -> str:
    months, remaining = divmod(days, DAYS_PER_BILLING_MONTH)
    if months == 0:
        return _plural(remaining, "day")
    if remaining == 0:
        return _plural(months, "month")
    return f"{_plural(months, 'month')} and {_plural(remaining, 'day')}"


def format_duration(
    days: int,
    start_date: date | datetime | None = None,
    end_date: date | datetime | None = None,
) -> str:
    """Describe a booking length for cost estimates, e.g. "1 year and 2 months".

    With both dates the difference is calendar-aware: whole years and months
    are counted first, then the days left from start_date advanced by those
    months (clamped to the month end). Only non-zero parts are listed.

    Without dates, ``days`` is split into 30-day months; zero or negative
    durations read as the one-month minimum booking.
    """
    if start_date is not None and end_date is not None:
        start = as_date(start_date)
        end = as_date(end_date)
        total_months = (end.year - start.year) * 12 + end.month - start.month
        if end.day < start.day:
            total_months -= 1
        total_months = max(total_months, 0)
        years, months = divmod(total_months, 12)
        day_diff = (end - _add_months(start, total_months)).days
        parts = []
        if years > 0:
            parts.append(_plural(years, "year"))
        if months > 0:
            parts.append(_plural(months, "month"))
        if day_diff > 0:
            parts.append(_plural(day_diff, "day"))
        return " and ".join(parts) if parts else "0 days"

    if days <= 0:
        return "1 month"
    return _months_and_days(days)


def format_day_count(days: int) -> str:
    """Describe a quotation duration, e.g. "2 months and 5 days". Zero reads "0 days"."""
    if days <= 0:
        return "0 days"
    return _months_and_days(days)


def booking_days(start_date: date | datetime, end_date: date | datetime) -> int:
    """Whole days between start and end, rounded up, never less than 1."""
    if isinstance(start_date, datetime) and isinstance(end_date, datetime):
        seconds = (end_date - start_date).total_seconds()
        days = math.ceil(seconds / 86400)
    else:
        days = (as_date(end_date) - as_date(start_date)).days
    return max(1, days)


def calculate_quotation_total(
    start_date: date | datetime,
    end_date: date | datetime,
    items: Iterable[Mapping[str, Any]],
) -> QuotationTotals:
    """Price quotation items at ``price / 30`` per day over the booking length.

    Args:
        start_date: Booking start.
        end_date: Booking end.
        items: Quotation items; each needs a monthly ``price``.

    Returns:
        QuotationTotals with the duration, per-item totals, and their sum.
    """
    duration = booking_days(start_date, end_date)
    item_totals = [
        to_decimal(item.get("price")) * duration / DAYS_PER_BILLING_MONTH
        for item in items
    ]
    return QuotationTotals(
        duration_days=duration,
        item_totals=item_totals,
        total_amount=sum(item_totals, Decimal(0)),
    )


def vat_breakdown(subtotal: Number, rate: Decimal = VAT_RATE) -> VatBreakdown:
    """Return subtotal, VAT at ``rate`` and the VAT-inclusive total."""
    base = to_decimal(subtotal)
    vat = base * rate
    return VatBreakdown(subtotal=base, vat=vat, total=base + vat)
