"""DTOs for finance requests (reimbursements and requisitions)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FinanceRequestResult:
    """Finance request read-model (Firestore field names are human labels)."""

    id: str
    company_id: str
    request_type: str
    request_no: int
    requestor: str
    requested_item: str
    amount: float
    approved_by: str
    attachments: str
    actions: str
    deleted: bool = False
    date_released: datetime | None = None
    cashback: int | None = None
    or_no: str | None = None
    invoice_no: str | None = None
    quotation: str | None = None
    date_requested: datetime | None = None
    created: datetime | None = None


@dataclass(frozen=True)
class FinanceRequestCreate:
    """Input for creating a finance request."""

    request_type: str
    requestor: str
    requested_item: str
    amount: float
    approved_by: str = ""
    actions: str = "Pending"
    request_no: int | None = None
    attachments: str = ""
    date_released: datetime | None = None
    cashback: int = 0
    or_no: str = ""
    invoice_no: str = ""
    quotation: str = ""
    date_requested: datetime | None = None
