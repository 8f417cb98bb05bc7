"""Application interfaces (ports): repository and gateway protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IBookingRepository,
    IClientRepository,
    ICollectibleRepository,
    ICompanyRepository,
    ICostEstimateRepository,
    IEmailRecordRepository,
    IFinanceRequestRepository,
    IJobOrderRepository,
    IPettyCashConfigRepository,
    IPettyCashCycleRepository,
    IPettyCashExpenseRepository,
    IProductRepository,
    IQuotationRepository,
    IReportRepository,
    IScreenScheduleRepository,
    IServiceAssignmentRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IEmailSender,
    IEmailTemplateRenderer,
    IPdfRenderer,
    IPlayerControl,
    IStorageService,
    RenderedPdf,
    StoredObject,
)

__all__ = [
    "IBookingRepository",
    "IClientRepository",
    "ICollectibleRepository",
    "ICompanyRepository",
    "ICostEstimateRepository",
    "IEmailRecordRepository",
    "IEmailSender",
    "IEmailTemplateRenderer",
    "IFinanceRequestRepository",
    "IJobOrderRepository",
    "IPettyCashConfigRepository",
    "IPettyCashCycleRepository",
    "IPettyCashExpenseRepository",
    "IPdfRenderer",
    "IPlayerControl",
    "IProductRepository",
    "IQuotationRepository",
    "IReportRepository",
    "IScreenScheduleRepository",
    "IServiceAssignmentRepository",
    "IStorageService",
    "IUserRepository",
    "RenderedPdf",
    "StoredObject",
]
