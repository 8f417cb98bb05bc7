"""DTOs for bookings."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class BookingResult:
    """Booking read-model."""

    id: str
    company_id: str
    product_id: str
    product_name: str
    quotation_id: str
    status: str
    type: str
    start_date: datetime | None
    end_date: datetime | None
    total_cost: float
    seller_id: str = ""
    user_id: str = ""
    client: dict[str, Any] = field(default_factory=dict)
    cost_details: dict[str, Any] = field(default_factory=dict)
    payment_method: str = ""
    created: datetime | None = None
    updated: datetime | None = None
