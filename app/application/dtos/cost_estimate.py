"""DTOs for cost estimates."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CostEstimateLineItem:
    """One priced line of a cost estimate."""

    id: str
    description: str
    quantity: int
    unit_price: float
    total_price: float
    category: str
    notes: str = ""


@dataclass(frozen=True)
class CostEstimateResult:
    """Cost estimate read-model."""

    id: str
    title: str
    line_items: list[CostEstimateLineItem]
    subtotal: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    status: str
    password: str
    client_name: str = ""
    client_email: str = ""
    client_company: str = ""
    client_id: str | None = None
    company_id: str | None = None
    proposal_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    notes: str = ""
    created_by: str | None = None
    approved_at: datetime | None = None
    approved_by: str | None = None
    rejected_at: datetime | None = None
    rejected_by: str | None = None
    rejection_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SiteForEstimate:
    """A site offered in a cost estimate: becomes one media_cost line."""

    product_id: str
    name: str
    location: str
    price: float
