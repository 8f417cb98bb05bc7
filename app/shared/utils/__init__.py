"""Shared utilities: datetime, generators, formatting, sanitization."""

from app.shared.utils.datetime import (
    coerce_datetime,
    ensure_utc,
    epoch_millis,
    from_timestamp_utc,
    utc_now,
)
from app.shared.utils.formatting import (
    format_company_address,
    format_currency,
    format_long_date,
)
from app.shared.utils.generators import generate_cuid
from app.shared.utils.sanitization import EmailBodySanitizer, split_addresses

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "epoch_millis",
    "coerce_datetime",
    "from_timestamp_utc",
    "format_company_address",
    "format_currency",
    "format_long_date",
    "EmailBodySanitizer",
    "split_addresses",
]
