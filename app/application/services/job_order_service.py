"""Job order service: job orders raised from quotations and assigned to crews."""

from __future__ import annotations

import logging

from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.job_order import JobOrderResult
from app.application.interfaces.repositories import IJobOrderRepository
from app.application.services.access import ensure_company_access
from app.application.services.quotation_service import QuotationService
from app.domain.enums import JobOrderStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_job_order_number

logger = logging.getLogger(__name__)


class JobOrderService:
    def __init__(
        self, job_order_repo: IJobOrderRepository, quotation_service: QuotationService
    ) -> None:
        self._repo = job_order_repo
        self._quotations = quotation_service

    async def create_from_quotation(
        self,
        quotation_id: str,
        user: CurrentUser,
        product_id: str | None = None,
        notes: str = "",
    ) -> JobOrderResult:
        """Raise a pending job order for one site of a quotation (the first by default)."""
        quotation = await self._quotations.get(quotation_id, user)
        if not quotation.items:
            raise ValidationException("Quotation has no sites", field="quotation_id")
        item = quotation.items[0]
        if product_id:
            matching = [i for i in quotation.items if i.product_id == product_id]
            if not matching:
                raise ValidationException(
                    f"Site {product_id} is not part of quotation {quotation.quotation_number}",
                    field="product_id",
                )
            item = matching[0]
        payload = {
            "job_order_number": generate_job_order_number(utc_now()),
            "quotation_id": quotation.id,
            "quotation_number": quotation.quotation_number,
            "client_name": quotation.client_name,
            "client_email": quotation.client_email,
            "client_company": quotation.client_company,
            "product_id": item.product_id,
            "product_name": item.name,
            "product_location": item.location,
            "site_code": item.site_code,
            "start_date": quotation.start_date,
            "end_date": quotation.end_date,
            "duration_days": item.duration_days or quotation.duration_days,
            "total_amount": item.item_total_amount or quotation.total_amount,
            "status": JobOrderStatus.PENDING.value,
            "created_by": user.uid,
            "created_by_name": user.display_name,
            "assigned_to": None,
            "assigned_to_name": None,
            "notes": notes,
            "company_id": user.company_id or quotation.company_id,
        }
        job_order_id = await self._repo.create(payload)
        logger.info("Job order %s created from quotation %s", job_order_id, quotation_id)
        return await self.get(job_order_id)

    async def get(
        self, job_order_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> JobOrderResult:
        job_order = await self._repo.get_by_id(job_order_id)
        if job_order is None:
            raise ResourceNotFoundException("JobOrder", job_order_id)
        if user is not None:
            ensure_company_access("job_order", job_order_id, job_order.company_id, user, action)
        return job_order

    async def update_status(
        self, job_order_id: str, status: str, user: CurrentUser
    ) -> JobOrderResult:
        if status not in JobOrderStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(JobOrderStatus.values())}",
                field="status",
            )
        await self.get(job_order_id, user, "update")
        await self._repo.update(job_order_id, {"status": status, "updated_by": user.uid})
        return await self.get(job_order_id)

    async def assign(
        self, job_order_id: str, assignee_id: str, assignee_name: str, user: CurrentUser
    ) -> JobOrderResult:
        """Assign to a crew member; the job order moves to in_progress."""
        if not assignee_id:
            raise ValidationException("Assignee is required", field="assigned_to")
        await self.get(job_order_id, user, "assign")
        await self._repo.update(
            job_order_id,
            {
                "assigned_to": assignee_id,
                "assigned_to_name": assignee_name,
                "status": JobOrderStatus.IN_PROGRESS.value,
                "updated_by": user.uid,
            },
        )
        return await self.get(job_order_id)

    async def list_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]:
        return await self._repo.page_by_company(company_id, page_size, start_after_id)

    async def list_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]:
        return await self._repo.page_by_creator(user_id, page_size, start_after_id)
