"""Application DTOs (frozen dataclasses; no Firestore types)."""

from app.application.dtos.booking import BookingResult
from app.application.dtos.client import ClientCreate, ClientResult
from app.application.dtos.collectible import CollectibleResult
from app.application.dtos.common import CompanyResult, CurrentUser, Page
from app.application.dtos.cost_estimate import (
    CostEstimateLineItem,
    CostEstimateResult,
    SiteForEstimate,
)
from app.application.dtos.email import (
    DocumentEmailRequest,
    EmailAttachment,
    NO_CONFIRMATION_ERROR,
    EmailOutcome,
    OutboundEmail,
    SendResult,
)
from app.application.dtos.finance_request import (
    FinanceRequestCreate,
    FinanceRequestResult,
)
from app.application.dtos.job_order import JobOrderResult
from app.application.dtos.petty_cash import (
    CycleWithExpenses,
    PettyCashConfig,
    PettyCashCycle,
    PettyCashExpense,
    PettyCashSummary,
)
from app.application.dtos.product import (
    ProductCreate,
    ProductResult,
    ScreenScheduleResult,
)
from app.application.dtos.quotation import (
    QuotationCreate,
    QuotationItem,
    QuotationResult,
)
from app.application.dtos.report import ReportAttachment, ReportCreate, ReportResult
from app.application.dtos.service_assignment import (
    CancelOutcome,
    RequestedBy,
    ServiceAssignmentCreate,
    ServiceAssignmentResult,
)

__all__ = [
    "NO_CONFIRMATION_ERROR",
    "BookingResult",
    "CancelOutcome",
    "ClientCreate",
    "ClientResult",
    "CollectibleResult",
    "CompanyResult",
    "CostEstimateLineItem",
    "CostEstimateResult",
    "CurrentUser",
    "CycleWithExpenses",
    "DocumentEmailRequest",
    "EmailAttachment",
    "EmailOutcome",
    "FinanceRequestCreate",
    "FinanceRequestResult",
    "JobOrderResult",
    "OutboundEmail",
    "Page",
    "PettyCashConfig",
    "PettyCashCycle",
    "PettyCashExpense",
    "PettyCashSummary",
    "ProductCreate",
    "ProductResult",
    "QuotationCreate",
    "QuotationItem",
    "QuotationResult",
    "ReportAttachment",
    "ReportCreate",
    "ReportResult",
    "RequestedBy",
    "ScreenScheduleResult",
    "SendResult",
    "ServiceAssignmentCreate",
    "ServiceAssignmentResult",
    "SiteForEstimate",
]
