"""Firestore repositories, one per collection."""

from app.infrastructure.firebase.repositories.booking_repo_firestore import (
    FirestoreBookingRepository,
)
from app.infrastructure.firebase.repositories.client_repo_firestore import (
    FirestoreClientRepository,
)
from app.infrastructure.firebase.repositories.collectible_repo_firestore import (
    FirestoreCollectibleRepository,
)
from app.infrastructure.firebase.repositories.company_repo_firestore import (
    FirestoreCompanyRepository,
)
from app.infrastructure.firebase.repositories.cost_estimate_repo_firestore import (
    FirestoreCostEstimateRepository,
)
from app.infrastructure.firebase.repositories.email_repo_firestore import (
    FirestoreEmailRecordRepository,
)
from app.infrastructure.firebase.repositories.finance_request_repo_firestore import (
    FirestoreFinanceRequestRepository,
)
from app.infrastructure.firebase.repositories.job_order_repo_firestore import (
    FirestoreJobOrderRepository,
)
from app.infrastructure.firebase.repositories.petty_cash_repo_firestore import (
    FirestorePettyCashConfigRepository,
    FirestorePettyCashCycleRepository,
    FirestorePettyCashExpenseRepository,
)
from app.infrastructure.firebase.repositories.product_repo_firestore import (
    FirestoreProductRepository,
)
from app.infrastructure.firebase.repositories.quotation_repo_firestore import (
    FirestoreQuotationRepository,
)
from app.infrastructure.firebase.repositories.report_repo_firestore import (
    FirestoreReportRepository,
)
from app.infrastructure.firebase.repositories.screen_schedule_repo_firestore import (
    FirestoreScreenScheduleRepository,
)
from app.infrastructure.firebase.repositories.service_assignment_repo_firestore import (
    FirestoreServiceAssignmentRepository,
)
from app.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestoreBookingRepository",
    "FirestoreClientRepository",
    "FirestoreCollectibleRepository",
    "FirestoreCompanyRepository",
    "FirestoreCostEstimateRepository",
    "FirestoreEmailRecordRepository",
    "FirestoreFinanceRequestRepository",
    "FirestoreJobOrderRepository",
    "FirestorePettyCashConfigRepository",
    "FirestorePettyCashCycleRepository",
    "FirestorePettyCashExpenseRepository",
    "FirestoreProductRepository",
    "FirestoreQuotationRepository",
    "FirestoreReportRepository",
    "FirestoreScreenScheduleRepository",
    "FirestoreServiceAssignmentRepository",
    "FirestoreUserRepository",
]
