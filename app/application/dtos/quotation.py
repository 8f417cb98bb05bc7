"""DTOs for quotations."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class QuotationItem:
    """A site quoted at its monthly price; totals are filled by the billing rules."""

    product_id: str
    name: str
    location: str
    price: float
    site_code: str = ""
    type: str = ""
    description: str = ""
    media_url: str | None = None
    duration_days: int = 0
    item_total_amount: float = 0.0


@dataclass(frozen=True)
class QuotationResult:
    """Quotation read-model."""

    id: str
    quotation_number: str
    items: list[QuotationItem]
    start_date: datetime | None
    end_date: datetime | None
    duration_days: int
    total_amount: float
    status: str
    client_name: str
    client_email: str
    client_id: str | None = None
    client_company: str = ""
    seller_id: str | None = None
    company_id: str | None = None
    created_by: str | None = None
    campaign_id: str | None = None
    proposal_id: str | None = None
    valid_until: datetime | None = None
    created: datetime | None = None
    updated: datetime | None = None
    updated_by: str | None = None


@dataclass(frozen=True)
class QuotationCreate:
    """Input for creating a quotation."""

    client_name: str
    client_email: str
    start_date: datetime
    end_date: datetime
    items: list[QuotationItem]
    client_id: str | None = None
    client_company: str = ""
    campaign_id: str | None = None
    proposal_id: str | None = None
    notes: str = ""
    extra: dict = field(default_factory=dict)
