"""Finance request service: reimbursements and requisitions."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.common import CurrentUser
from app.application.dtos.finance_request import (
    FinanceRequestCreate,
    FinanceRequestResult,
)
from app.application.interfaces.repositories import IFinanceRequestRepository
from app.application.services.access import ensure_company_access
from app.domain.enums import FinanceRequestType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.generators import generate_request_number

logger = logging.getLogger(__name__)


class FinanceRequestService:
    def __init__(self, request_repo: IFinanceRequestRepository) -> None:
        self._repo = request_repo

    async def create(
        self, data: FinanceRequestCreate, user: CurrentUser
    ) -> FinanceRequestResult:
        """Create a request; a missing request number gets a random six-digit one."""
        if data.request_type not in FinanceRequestType.values():
            raise ValidationException(
                f"Invalid request type. Allowed: {', '.join(FinanceRequestType.values())}",
                field="request_type",
            )
        if not user.company_id:
            raise ValidationException("User is not linked to a company", field="company_id")
        if data.amount < 0:
            raise ValidationException("Amount cannot be negative", field="amount")
        if not data.requestor.strip() or not data.requested_item.strip():
            raise ValidationException("Requestor and requested item are required")

        payload: dict[str, Any] = {
            "company_id": user.company_id,
            "deleted": False,
            "request_type": data.request_type,
            "Request No.": int(data.request_no or generate_request_number()),
            "Requestor": data.requestor,
            "Requested Item": data.requested_item,
            "Amount": float(data.amount),
            "Approved By": data.approved_by,
            "Attachments": data.attachments,
            "Actions": data.actions or "Pending",
        }
        if data.request_type == FinanceRequestType.REIMBURSEMENT.value:
            payload["Date Released"] = data.date_released
        else:
            payload.update({
                "Cashback": int(data.cashback or 0),
                "O.R No.": data.or_no,
                "Invoice No.": data.invoice_no,
                "Quotation": data.quotation,
                "Date Requested": data.date_requested,
            })
        request_id = await self._repo.create(payload)
        logger.info("Finance request %s (%s) created", request_id, data.request_type)
        return await self.get(request_id)

    async def get(
        self, request_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> FinanceRequestResult:
        request = await self._repo.get_by_id(request_id)
        if request is None or request.deleted:
            raise ResourceNotFoundException("FinanceRequest", request_id)
        if user is not None:
            ensure_company_access("finance_request", request_id, request.company_id, user, action)
        return request

    async def list_by_company(self, company_id: str) -> list[FinanceRequestResult]:
        return await self._repo.list_by_company(company_id)

    async def update_action(
        self, request_id: str, action: str, user: CurrentUser | None = None
    ) -> FinanceRequestResult:
        """Set the Actions column (e.g. Pending, Approved, Released)."""
        if not action.strip():
            raise ValidationException("Action is required", field="action")
        await self.get(request_id, user, "update")
        await self._repo.update(request_id, {"Actions": action})
        return await self.get(request_id)

    async def soft_delete(self, request_id: str, user: CurrentUser | None = None) -> None:
        await self.get(request_id, user, "delete")
        await self._repo.update(request_id, {"deleted": True})
