"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.booking import BookingResult
    from app.application.dtos.client import ClientCreate, ClientResult
    from app.application.dtos.collectible import CollectibleResult
    from app.application.dtos.common import CompanyResult, CurrentUser, Page
    from app.application.dtos.cost_estimate import CostEstimateResult
    from app.application.dtos.finance_request import FinanceRequestResult
    from app.application.dtos.job_order import JobOrderResult
    from app.application.dtos.petty_cash import (
        PettyCashConfig,
        PettyCashCycle,
        PettyCashExpense,
    )
    from app.application.dtos.product import (
        ProductCreate,
        ProductResult,
        ScreenScheduleResult,
    )
    from app.application.dtos.quotation import QuotationResult
    from app.application.dtos.report import ReportResult
    from app.application.dtos.service_assignment import ServiceAssignmentResult


class IProductRepository(Protocol):
    """Protocol for product (site) repository."""

    async def get_by_id(self, doc_id: str) -> ProductResult | None: ...

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None: ...

    async def create(self, data: ProductCreate) -> ProductResult: ...

    async def update(self, product_id: str, fields: dict[str, Any]) -> None: ...

    async def soft_delete(self, product_id: str) -> None: ...

    async def page_by_company(
        self,
        company_id: str,
        page_size: int,
        start_after_id: str | None = None,
        active: bool | None = None,
    ) -> Page[ProductResult]:
        """Products of a company ordered by name, excluding deleted ones."""

    async def count_by_company(self, company_id: str, active: bool | None = None) -> int: ...


class IClientRepository(Protocol):
    """Protocol for client repository."""

    async def get_by_id(self, doc_id: str) -> ClientResult | None: ...

    async def get_by_email(self, email: str) -> ClientResult | None: ...

    async def create(
        self, data: ClientCreate, uploaded_by: str, uploaded_by_name: str = ""
    ) -> ClientResult: ...

    async def update(self, client_id: str, fields: dict[str, Any]) -> None: ...

    async def delete(self, client_id: str) -> None: ...

    async def page(
        self,
        page_size: int,
        start_after_id: str | None = None,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> Page[ClientResult]: ...

    async def list_all(
        self,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> list[ClientResult]: ...

    async def count(
        self,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> int: ...


class IQuotationRepository(Protocol):
    """Protocol for quotation repository."""

    async def get_by_id(self, doc_id: str) -> QuotationResult | None: ...

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, quotation_id: str, fields: dict[str, Any]) -> None: ...

    async def page_by_seller(
        self, seller_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]: ...

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]: ...

    async def list_by_campaign(self, campaign_id: str) -> list[QuotationResult]: ...

    async def sign(
        self,
        quotation_id: str,
        user_id: str,
        collectibles: list[dict[str, Any]],
        booking: dict[str, Any],
    ) -> tuple[list[str], str]:
        """Accept the quotation and create collectibles and booking atomically."""


class ICostEstimateRepository(Protocol):
    """Protocol for cost estimate repository."""

    async def get_by_id(self, doc_id: str) -> CostEstimateResult | None: ...

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, estimate_id: str, fields: dict[str, Any]) -> None: ...

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[CostEstimateResult]: ...


class IJobOrderRepository(Protocol):
    """Protocol for job order repository."""

    async def get_by_id(self, doc_id: str) -> JobOrderResult | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, job_order_id: str, fields: dict[str, Any]) -> None: ...

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]: ...

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]: ...


class IServiceAssignmentRepository(Protocol):
    """Protocol for service assignment repository."""

    async def get_by_id(self, doc_id: str) -> ServiceAssignmentResult | None: ...

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, assignment_id: str, fields: dict[str, Any]) -> None: ...

    async def mark_cancelled(self, assignment_id: str, uid: str) -> None:
        """Set status Cancelled, cancellation_date (server time) and cancelled_by_uid in one update."""

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[ServiceAssignmentResult]: ...


class IReportRepository(Protocol):
    """Protocol for report repository."""

    async def get_by_id(self, doc_id: str) -> ReportResult | None: ...

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, report_id: str, fields: dict[str, Any]) -> None: ...

    async def list_by_site(self, site_id: str) -> list[ReportResult]: ...


class IBookingRepository(Protocol):
    """Protocol for booking repository."""

    async def get_by_id(self, doc_id: str) -> BookingResult | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def page_by_status(
        self,
        company_id: str,
        status: str,
        page_size: int,
        start_after_id: str | None = None,
    ) -> Page[BookingResult]: ...

    async def count_by_status(self, company_id: str, status: str) -> int: ...


class ICollectibleRepository(Protocol):
    """Protocol for collectible repository."""

    async def get_by_id(self, doc_id: str) -> CollectibleResult | None: ...

    async def create(self, data: dict[str, Any], doc_id: str | None = None) -> str: ...

    async def update(self, collectible_id: str, fields: dict[str, Any]) -> None: ...

    async def soft_delete(self, collectible_id: str) -> None: ...

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[CollectibleResult]: ...


class IFinanceRequestRepository(Protocol):
    """Protocol for finance request repository."""

    async def get_by_id(self, doc_id: str) -> FinanceRequestResult | None: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, request_id: str, fields: dict[str, Any]) -> None: ...

    async def list_by_company(self, company_id: str) -> list[FinanceRequestResult]: ...


class IPettyCashConfigRepository(Protocol):
    async def get_by_id(self, doc_id: str) -> PettyCashConfig | None: ...

    async def save(self, company_id: str, amount: float, warning_amount: float) -> None: ...


class IPettyCashCycleRepository(Protocol):
    async def get_by_id(self, doc_id: str) -> PettyCashCycle | None: ...

    async def latest(self, company_id: str) -> PettyCashCycle | None: ...

    async def list_by_company(self, company_id: str) -> list[PettyCashCycle]: ...

    async def create(self, company_id: str, cycle_no: int) -> str: ...

    async def update(self, cycle_id: str, fields: dict[str, Any]) -> None: ...


class IPettyCashExpenseRepository(Protocol):
    async def create(self, data: dict[str, Any]) -> str:
        """Store the expense and increment its cycle total in the same commit."""

    async def get_by_id(self, doc_id: str) -> PettyCashExpense | None: ...

    async def list_by_cycle(self, cycle_id: str) -> list[PettyCashExpense]: ...


class IScreenScheduleRepository(Protocol):
    async def get_by_id(self, doc_id: str) -> ScreenScheduleResult | None: ...

    async def list_for_product(self, product_id: str) -> list[ScreenScheduleResult]: ...

    async def create(self, data: dict[str, Any]) -> str: ...

    async def update(self, schedule_id: str, fields: dict[str, Any]) -> None: ...


class ICompanyRepository(Protocol):
    async def get_by_id(self, doc_id: str) -> CompanyResult | None: ...


class IUserRepository(Protocol):
    async def get_by_id(self, doc_id: str) -> CurrentUser | None:
        """Return the iboard_users profile as a CurrentUser (company_id, name)."""


class IEmailRecordRepository(Protocol):
    async def record(self, data: dict[str, Any], sent: bool) -> str:
        """Log an outbound email with status sent/failed; return the record ID."""
