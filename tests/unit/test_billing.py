"""Billing rules: prorating, durations, quotation totals and VAT."""

from datetime import date, datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app.domain.billing import (
    as_date,
    booking_days,
    calculate_prorated_price,
    calculate_quotation_total,
    days_in_month,
    format_day_count,
    format_duration,
    quantize_money,
    to_decimal,
    vat_breakdown,
)
from app.domain.exceptions import ValidationException
from app.infrastructure.firebase._rest_encoding import decode_fields
from app.shared.utils.formatting import format_long_date


@pytest.mark.parametrize(
    "day",
    [date(2024, 2, 10), date(2023, 2, 28), date(2024, 4, 30), date(2024, 12, 31)],
)
def test_single_day_is_rate_over_days_in_month(day: date) -> None:
    rate = Decimal("31000")
    expected = rate / days_in_month(day.year, day.month)
    assert calculate_prorated_price(rate, day, day) == expected


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (date(2024, 1, 1), date(2024, 1, 31)),
        (date(2024, 2, 1), date(2024, 2, 29)),
        (date(2023, 2, 1), date(2023, 2, 28)),
        (date(2024, 6, 1), date(2024, 6, 30)),
    ],
)
def test_full_calendar_month_is_exactly_the_rate(start: date, end: date) -> None:
    assert calculate_prorated_price(Decimal("1234.56"), start, end) == Decimal("1234.56")


def test_prorated_price_never_decreases_as_end_moves_later() -> None:
    start = date(2024, 1, 15)
    previous = Decimal(0)
    for offset in range(0, 120):
        end = date.fromordinal(start.toordinal() + offset)
        price = calculate_prorated_price(50000, start, end)
        assert price >= previous
        previous = price


def test_prorating_spans_months_with_their_own_lengths() -> None:
    # 17 of 31 January days, all of February (leap year), 10 of 31 March days
    price = calculate_prorated_price(3100, date(2024, 1, 15), date(2024, 3, 10))
    expected = Decimal(3100) * 17 / 31 + Decimal(3100) + Decimal(3100) * 10 / 31
    assert price == expected


def test_end_before_start_prices_nothing() -> None:
    assert calculate_prorated_price(1000, date(2024, 3, 2), date(2024, 3, 1)) == 0


def test_negative_rate_is_rejected() -> None:
    with pytest.raises(ValidationException):
        calculate_prorated_price(-1, date(2024, 1, 1), date(2024, 1, 2))


def test_datetimes_are_prorated_by_calendar_date() -> None:
    start = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    end = datetime(2024, 5, 31, 10, 0, tzinfo=timezone.utc)
    assert calculate_prorated_price(900, start, end) == Decimal(900)


def test_stored_timestamps_are_read_in_manila_time() -> None:
    # 00:00 in Manila on March 1 and March 31
    fields = decode_fields(
        {
            "start_date": {"timestampValue": "2024-02-29T16:00:00Z"},
            "end_date": {"timestampValue": "2024-03-30T16:00:00Z"},
        }
    )
    start, end = fields["start_date"], fields["end_date"]

    assert calculate_prorated_price(31000, start, end) == Decimal(31000)
    assert format_duration(0, start, end) == "30 days"
    assert as_date(start) == date(2024, 3, 1)
    assert format_long_date(end) == "March 31, 2024"


def test_as_date_accepts_an_explicit_timezone() -> None:
    late = datetime(2024, 3, 31, 20, 0, tzinfo=timezone.utc)
    assert as_date(late, timezone.utc) == date(2024, 3, 31)
    assert as_date(late, ZoneInfo("Asia/Manila")) == date(2024, 4, 1)
    assert as_date(datetime(2024, 3, 31, 20, 0)) == date(2024, 3, 31)


def test_format_duration_zero_reads_one_month() -> None:
    assert format_duration(0) == "1 month"


@pytest.mark.parametrize(
    ("days", "expected"),
    [(1, "1 day"), (30, "1 month"), (60, "2 months"), (45, "1 month and 15 days")],
)
def test_format_duration_from_day_count(days: int, expected: str) -> None:
    assert format_duration(days) == expected


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (date(2024, 1, 15), date(2024, 3, 15), "2 months"),
        (date(2024, 1, 1), date(2025, 3, 1), "1 year and 2 months"),
        (date(2024, 1, 31), date(2024, 3, 1), "1 month and 1 day"),
        (date(2024, 1, 31), date(2024, 3, 30), "1 month and 30 days"),
        (date(2024, 1, 31), date(2024, 2, 29), "29 days"),
        (date(2023, 11, 30), date(2024, 3, 1), "3 months and 1 day"),
        (date(2023, 12, 20), date(2024, 1, 5), "16 days"),
        (date(2024, 5, 5), date(2024, 5, 5), "0 days"),
    ],
)
def test_format_duration_is_calendar_aware_with_dates(
    start: date, end: date, expected: str
) -> None:
    assert format_duration(0, start, end) == expected


def test_format_duration_has_no_trailing_zero_days_on_month_boundaries() -> None:
    text = format_duration(0, date(2024, 2, 1), date(2024, 8, 1))
    assert text == "6 months"
    assert "0 days" not in text


def test_format_day_count() -> None:
    assert format_day_count(0) == "0 days"
    assert format_day_count(65) == "2 months and 5 days"


def test_booking_days_rounds_up_and_has_a_minimum_of_one() -> None:
    start = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert booking_days(start, datetime(2024, 1, 11, 1, 0, tzinfo=timezone.utc)) == 11
    assert booking_days(start, start) == 1
    assert booking_days(date(2024, 1, 1), date(2024, 1, 31)) == 30


def test_quotation_total_prices_each_item_per_thirty_day_month() -> None:
    totals = calculate_quotation_total(
        date(2024, 1, 1), date(2024, 1, 16), [{"price": 30000}, {"price": "15000"}, {}]
    )
    assert totals.duration_days == 15
    assert totals.item_totals == [Decimal(15000), Decimal(7500), Decimal(0)]
    assert totals.total_amount == Decimal(22500)


def test_vat_breakdown_and_rounding() -> None:
    vat = vat_breakdown(Decimal("1000"))
    assert (vat.subtotal, vat.vat, vat.total) == (Decimal("1000"), Decimal("120.00"), Decimal("1120.00"))
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")


def test_to_decimal_keeps_float_text() -> None:
    assert to_decimal(1234.56) == Decimal("1234.56")
    assert to_decimal(None) == 0
    assert to_decimal("") == 0
