"""ID and document number generators (CUID, QT/JO/SA/INV numbers, passwords)."""

import random
import secrets
import string
from datetime import datetime

from cuid2 import cuid_wrapper

from app.shared.utils.datetime import epoch_millis, utc_now

cuid_generator = cuid_wrapper()

_PASSWORD_ALPHABET = string.ascii_uppercase + string.digits


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def _dated_number(prefix: str, now: datetime | None) -> str:
    now = now or utc_now()
    suffix = str(epoch_millis(now))[-4:]
    return f"{prefix}-{now:%Y%m%d}-{suffix}"


def generate_quotation_number(now: datetime | None = None) -> str:
    """Return ``QT-YYYYMMDD-NNNN`` where NNNN are the last digits of the epoch millis."""
    return _dated_number("QT", now)


def generate_job_order_number(now: datetime | None = None) -> str:
    """Return ``JO-YYYYMMDD-NNNN``."""
    return _dated_number("JO", now)


def generate_sa_number() -> str:
    """Return a service assignment number, ``SA-`` followed by six digits."""
    return f"SA-{random.randint(100000, 999999)}"


def generate_request_number() -> int:
    """Return a random six-digit finance request number."""
    return random.randint(100000, 999999)


def generate_cost_estimate_password(length: int = 8) -> str:
    """Return a random access code of upper-case letters and digits."""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


def receivable_numbers(
    quotation_number: str, document_id: str, now: datetime | None = None
) -> dict[str, str]:
    """Invoice, OR, BI and booking numbers for a collectible created from a quotation.

    The trailing four characters of ``document_id`` tell apart the items of
    one quotation.
    """
    tail = document_id[-4:]
    millis = epoch_millis(now)
    return {
        "invoice_no": f"INV-{quotation_number}-{tail}",
        "or_no": f"OR-{millis}-{tail}",
        "bi_no": f"BI-{millis}-{tail}",
        "booking_no": f"BK-{quotation_number}-{tail}",
    }
