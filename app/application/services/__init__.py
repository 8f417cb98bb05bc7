"""Application services, one per business area."""

from app.application.services.booking_service import BookingService
from app.application.services.client_service import ClientService
from app.application.services.collectible_service import CollectibleService
from app.application.services.cost_estimate_service import CostEstimateService
from app.application.services.document_email_service import DocumentEmailService
from app.application.services.document_pdf_service import DocumentPdfService
from app.application.services.finance_request_service import FinanceRequestService
from app.application.services.job_order_service import JobOrderService
from app.application.services.pagination import (
    CursorPaginator,
    PageCache,
    PageCacheRegistry,
)
from app.application.services.petty_cash_service import PettyCashService
from app.application.services.product_service import ProductService
from app.application.services.quotation_service import QuotationService
from app.application.services.report_service import ReportService
from app.application.services.screen_schedule_service import ScreenScheduleService
from app.application.services.service_assignment_service import (
    ServiceAssignmentService,
)

__all__ = [
    "BookingService",
    "ClientService",
    "CollectibleService",
    "CostEstimateService",
    "CursorPaginator",
    "DocumentEmailService",
    "DocumentPdfService",
    "FinanceRequestService",
    "JobOrderService",
    "PageCache",
    "PageCacheRegistry",
    "PettyCashService",
    "ProductService",
    "QuotationService",
    "ReportService",
    "ScreenScheduleService",
    "ServiceAssignmentService",
]
