"""DTOs for job orders."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class JobOrderResult:
    """Job order read-model."""

    id: str
    job_order_number: str
    quotation_id: str
    quotation_number: str
    client_name: str
    client_email: str
    product_name: str
    product_location: str
    status: str
    start_date: datetime | None
    end_date: datetime | None
    duration_days: int
    total_amount: float
    created_by: str
    client_company: str = ""
    site_code: str = ""
    created_by_name: str = ""
    assigned_to: str | None = None
    assigned_to_name: str | None = None
    notes: str = ""
    company_id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
