"""DTOs for collectibles (accounts receivable)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CollectibleResult:
    """Collectible read-model."""

    id: str
    client_name: str
    company_id: str
    type: str
    net_amount: float
    total_amount: float
    invoice_no: str
    or_no: str
    bi_no: str
    booking_no: str
    mode_of_payment: str
    status: str
    covered_period: str
    site: str
    quotation_id: str | None = None
    quotation_number: str | None = None
    product_id: str | None = None
    product_name: str = ""
    vendor_name: str = ""
    business_address: str = ""
    collection_date: datetime | None = None
    deleted: bool = False
    created: datetime | None = None
    updated: datetime | None = None
