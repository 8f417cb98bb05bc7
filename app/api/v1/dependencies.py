"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the signed-in user, Firestore repositories,
outbound gateways and application services. Routes depend only on these
dependencies, not on infrastructure directly; tests replace them through
app.dependency_overrides.

Firestore-backed dependencies answer 503 when no service account is
configured, so the app still starts (and serves health checks) without one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.common import CompanyResult, CurrentUser
from app.application.interfaces.services import (
    IEmailSender,
    IPlayerControl,
    IStorageService,
)
from app.application.services import (
    BookingService,
    ClientService,
    CollectibleService,
    CostEstimateService,
    DocumentEmailService,
    DocumentPdfService,
    FinanceRequestService,
    JobOrderService,
    PageCacheRegistry,
    PettyCashService,
    ProductService,
    QuotationService,
    ReportService,
    ScreenScheduleService,
    ServiceAssignmentService,
)
from app.core.config import get_settings
from app.infrastructure.external.cms import PlayerControlClient
from app.infrastructure.external.email import EmailTemplateRenderer, create_email_sender
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.firebase import (
    FirestoreRESTClient,
    get_firestore_client,
    get_service_account_info,
)
from app.infrastructure.firebase.repositories import (
    FirestoreBookingRepository,
    FirestoreClientRepository,
    FirestoreCollectibleRepository,
    FirestoreCompanyRepository,
    FirestoreCostEstimateRepository,
    FirestoreEmailRecordRepository,
    FirestoreFinanceRequestRepository,
    FirestoreJobOrderRepository,
    FirestorePettyCashConfigRepository,
    FirestorePettyCashCycleRepository,
    FirestorePettyCashExpenseRepository,
    FirestoreProductRepository,
    FirestoreQuotationRepository,
    FirestoreReportRepository,
    FirestoreScreenScheduleRepository,
    FirestoreServiceAssignmentRepository,
    FirestoreUserRepository,
)
from app.infrastructure.pdf import ReportlabPdfRenderer
from app.infrastructure.security import verify_id_token
from app.shared.context import set_current_user

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


# ---- Shared resources ----


def _get_firestore_client_or_raise() -> FirestoreRESTClient:
    """Return Firestore client or raise HTTPException 503 with standard message."""
    client = get_firestore_client()
    if not client:
        raise HTTPException(
            status_code=503,
            detail="Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)",
        )
    return client


def get_firestore() -> FirestoreRESTClient:
    """Firestore client for repositories (503 when not configured)."""
    return _get_firestore_client_or_raise()


FirestoreDep = Annotated[FirestoreRESTClient, Depends(get_firestore)]


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in the lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="HTTP client not initialized")
    return client


@lru_cache
def get_page_cache_registry() -> PageCacheRegistry:
    """Process-wide page caches (single instance per process)."""
    settings = get_settings()
    return PageCacheRegistry(
        max_queries=settings.page_cache_max_queries,
        ttl_seconds=settings.page_cache_ttl_seconds,
    )


PageCachesDep = Annotated[PageCacheRegistry, Depends(get_page_cache_registry)]


@dataclass(frozen=True)
class PageParams:
    """Requested page and page size (clamped to MAX_PAGE_SIZE)."""

    page: int
    page_size: int
    start_after: str | None = None


def get_page_params(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, description="Defaults to DEFAULT_PAGE_SIZE")] = None,
    start_after: Annotated[
        str | None, Query(description="Cursor: last_doc_id of the previous page")
    ] = None,
) -> PageParams:
    settings = get_settings()
    size = min(page_size or settings.default_page_size, settings.max_page_size)
    return PageParams(page=page, page_size=size, start_after=start_after)


PageParamsDep = Annotated[PageParams, Depends(get_page_params)]


# ---- Auth ----


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CurrentUser | None:
    """Return the signed-in user from a Firebase ID token if present; else None.

    Claims give uid, email and name; the iboard_users profile adds the
    company and roles.
    """
    if not credentials:
        return None
    settings = get_settings()
    project_id = settings.firebase_project_id or (get_service_account_info() or {}).get(
        "project_id"
    )
    try:
        claims = await verify_id_token(credentials.credentials, project_id)
    except ValueError as e:
        logger.info("Rejected ID token: %s", e)
        return None
    uid = claims["sub"]
    profile = await FirestoreUserRepository(_get_firestore_client_or_raise()).get_by_id(uid)
    user = CurrentUser(
        uid=uid,
        email=claims.get("email") or (profile.email if profile else None),
        display_name=(profile.display_name if profile else "") or claims.get("name", ""),
        company_id=profile.company_id if profile else None,
        roles=profile.roles if profile else [],
    )
    set_current_user(user.uid, user.company_id)
    return user


async def get_current_user(
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> CurrentUser:
    """Return the signed-in user; raise 401 if the token is missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


def get_company_id(user: CurrentUserDep) -> str:
    """Company of the signed-in user; company-scoped routes need one."""
    if not user.company_id:
        raise HTTPException(status_code=403, detail="User is not linked to a company")
    return user.company_id


CompanyIdDep = Annotated[str, Depends(get_company_id)]


# ---- Gateways ----


def get_storage_service(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> IStorageService:
    """Storage backend from settings (local or Firebase Storage)."""
    return StorageFactory.create_storage_service(get_settings(), http_client)


def get_email_sender(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> IEmailSender:
    """Resend sender, or log-only when RESEND_API_KEY is not set."""
    return create_email_sender(get_settings(), http_client)


def get_player_control(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> IPlayerControl:
    """Vendor CMS client for LED players."""
    settings = get_settings()
    return PlayerControlClient(
        base_url=settings.cms_base_url,
        http_client=http_client,
        notice_url=settings.cms_notice_url,
        timeout=settings.cms_timeout_seconds,
    )


# ---- Services ----


def get_product_service(db: FirestoreDep, caches: PageCachesDep) -> ProductService:
    return ProductService(FirestoreProductRepository(db), caches)


def get_client_service(db: FirestoreDep, caches: PageCachesDep) -> ClientService:
    return ClientService(FirestoreClientRepository(db), caches)


def get_quotation_service(db: FirestoreDep, caches: PageCachesDep) -> QuotationService:
    return QuotationService(
        FirestoreQuotationRepository(db),
        FirestoreProductRepository(db),
        caches,
        validity_days=get_settings().quotation_validity_days,
    )


def get_cost_estimate_service(db: FirestoreDep) -> CostEstimateService:
    return CostEstimateService(FirestoreCostEstimateRepository(db))


def get_job_order_service(
    db: FirestoreDep,
    quotation_service: Annotated[QuotationService, Depends(get_quotation_service)],
) -> JobOrderService:
    return JobOrderService(FirestoreJobOrderRepository(db), quotation_service)


def get_service_assignment_service(db: FirestoreDep) -> ServiceAssignmentService:
    return ServiceAssignmentService(FirestoreServiceAssignmentRepository(db))


def get_report_service(db: FirestoreDep) -> ReportService:
    return ReportService(
        FirestoreReportRepository(db),
        FirestoreServiceAssignmentRepository(db),
        FirestoreProductRepository(db),
        FirestoreJobOrderRepository(db),
    )


def get_booking_service(db: FirestoreDep, caches: PageCachesDep) -> BookingService:
    return BookingService(FirestoreBookingRepository(db), caches)


def get_collectible_service(db: FirestoreDep, caches: PageCachesDep) -> CollectibleService:
    return CollectibleService(FirestoreCollectibleRepository(db), caches)


def get_finance_request_service(db: FirestoreDep) -> FinanceRequestService:
    return FinanceRequestService(FirestoreFinanceRequestRepository(db))


def get_petty_cash_service(
    db: FirestoreDep,
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> PettyCashService:
    return PettyCashService(
        FirestorePettyCashConfigRepository(db),
        FirestorePettyCashCycleRepository(db),
        FirestorePettyCashExpenseRepository(db),
        storage,
    )


def get_screen_schedule_service(db: FirestoreDep) -> ScreenScheduleService:
    return ScreenScheduleService(FirestoreScreenScheduleRepository(db))


def get_document_email_service(
    db: FirestoreDep,
    sender: Annotated[IEmailSender, Depends(get_email_sender)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> DocumentEmailService:
    settings = get_settings()
    return DocumentEmailService(
        sender,
        storage,
        FirestoreEmailRecordRepository(db),
        FirestoreQuotationRepository(db),
        FirestoreCostEstimateRepository(db),
        EmailTemplateRenderer(),
        default_from=settings.email_from_default,
        app_url=settings.app_url,
        company_name=settings.company_name,
    )


def get_document_pdf_service(
    db: FirestoreDep,
    quotation_service: Annotated[QuotationService, Depends(get_quotation_service)],
    cost_estimate_service: Annotated[CostEstimateService, Depends(get_cost_estimate_service)],
    assignment_service: Annotated[
        ServiceAssignmentService, Depends(get_service_assignment_service)
    ],
    report_service: Annotated[ReportService, Depends(get_report_service)],
) -> DocumentPdfService:
    settings = get_settings()
    return DocumentPdfService(
        ReportlabPdfRenderer(quotation_validity_days=settings.quotation_validity_days),
        FirestoreCompanyRepository(db),
        quotation_service,
        cost_estimate_service,
        assignment_service,
        report_service,
        default_company=CompanyResult(
            id="", name=settings.company_name, address=settings.company_address
        ),
    )
