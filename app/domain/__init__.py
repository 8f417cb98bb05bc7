"""Domain layer: billing rules, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.billing import (
    VAT_RATE,
    calculate_prorated_price,
    calculate_quotation_total,
    format_day_count,
    format_duration,
    vat_breakdown,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BackofficeException,
    ExternalServiceException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "VAT_RATE",
    "calculate_prorated_price",
    "calculate_quotation_total",
    "format_day_count",
    "format_duration",
    "vat_breakdown",
    "AuthenticationException",
    "AuthorizationException",
    "BackofficeException",
    "ExternalServiceException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "ValidationException",
]
