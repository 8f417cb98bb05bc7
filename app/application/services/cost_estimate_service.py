"""Cost estimate service: default line items, VAT totals, access code, approval."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.cost_estimate import (
    CostEstimateLineItem,
    CostEstimateResult,
    SiteForEstimate,
)
from app.application.interfaces.repositories import ICostEstimateRepository
from app.application.services.access import ensure_company_access
from app.domain.billing import VAT_RATE, to_decimal, vat_breakdown
from app.domain.enums import CostCategory, CostEstimateStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cost_estimate_password

logger = logging.getLogger(__name__)

# zero-priced lines every estimate starts with, after the media lines
_STANDARD_LINES: tuple[tuple[str, CostCategory], ...] = (
    ("Creative Design & Production", CostCategory.PRODUCTION_COST),
    ("Installation & Setup", CostCategory.INSTALLATION_COST),
    ("Maintenance & Monitoring", CostCategory.MAINTENANCE_COST),
)


def line_item_to_dict(item: CostEstimateLineItem) -> dict[str, Any]:
    """Stored (camelCase) form of a line item."""
    return {
        "id": item.id,
        "description": item.description,
        "quantity": item.quantity,
        "unitPrice": item.unit_price,
        "totalPrice": item.total_price,
        "category": item.category,
        "notes": item.notes,
    }


def default_line_items(sites: list[SiteForEstimate]) -> list[CostEstimateLineItem]:
    """One media_cost line per site, then the standard zero-priced lines."""
    items = [
        CostEstimateLineItem(
            id=f"item_{n}",
            description=f"{site.name} - {site.location}",
            quantity=1,
            unit_price=site.price,
            total_price=site.price,
            category=CostCategory.MEDIA_COST.value,
        )
        for n, site in enumerate(sites, start=1)
    ]
    for offset, (description, category) in enumerate(_STANDARD_LINES, start=len(items) + 1):
        items.append(
            CostEstimateLineItem(
                id=f"item_{offset}",
                description=description,
                quantity=1,
                unit_price=0.0,
                total_price=0.0,
                category=category.value,
            )
        )
    return items


def estimate_totals(items: list[CostEstimateLineItem]) -> dict[str, float]:
    subtotal = sum((to_decimal(i.total_price) for i in items), Decimal(0))
    vat = vat_breakdown(subtotal)
    return {
        "subtotal": float(vat.subtotal),
        "taxRate": float(VAT_RATE),
        "taxAmount": float(vat.vat),
        "totalAmount": float(vat.total),
    }


class CostEstimateService:
    def __init__(self, cost_estimate_repo: ICostEstimateRepository) -> None:
        self._repo = cost_estimate_repo

    async def create_from_products(
        self,
        sites: list[SiteForEstimate],
        user: CurrentUser,
        *,
        title: str = "",
        client_name: str = "",
        client_email: str = "",
        client_company: str = "",
        client_id: str | None = None,
        proposal_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        notes: str = "",
        send_email: bool = False,
    ) -> CostEstimateResult:
        """Create an estimate with default line items; status is sent when mailed at once."""
        if not sites:
            raise ValidationException("At least one site is required", field="sites")
        if any(site.price < 0 for site in sites):
            raise ValidationException("Site price cannot be negative", field="sites")
        if start_date and end_date and end_date < start_date:
            raise ValidationException("End date must be on or after the start date", field="end_date")
        items = default_line_items(sites)
        status = CostEstimateStatus.SENT if send_email else CostEstimateStatus.DRAFT
        payload: dict[str, Any] = {
            "title": title or f"Cost Estimate for {client_company or client_name}".strip(),
            "lineItems": [line_item_to_dict(i) for i in items],
            **estimate_totals(items),
            "status": status.value,
            "password": generate_cost_estimate_password(),
            "clientName": client_name,
            "clientEmail": client_email,
            "clientCompany": client_company,
            "clientId": client_id,
            "company_id": user.company_id,
            "proposalId": proposal_id,
            "startDate": start_date,
            "endDate": end_date,
            "notes": notes,
            "createdBy": user.uid,
        }
        estimate_id = await self._repo.create(payload)
        logger.info("Cost estimate %s created with %d lines", estimate_id, len(items))
        return await self.get(estimate_id)

    async def get(
        self, estimate_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> CostEstimateResult:
        estimate = await self._repo.get_by_id(estimate_id)
        if estimate is None:
            raise ResourceNotFoundException("CostEstimate", estimate_id)
        if user is not None:
            ensure_company_access("cost_estimate", estimate_id, estimate.company_id, user, action)
        return estimate

    async def update_line_items(
        self, estimate_id: str, items: list[CostEstimateLineItem], user: CurrentUser
    ) -> CostEstimateResult:
        """Replace the line items and recompute subtotal, VAT and total."""
        await self.get(estimate_id, user, "update")
        if any(i.quantity < 0 or i.unit_price < 0 for i in items):
            raise ValidationException("Quantities and prices cannot be negative", field="line_items")
        await self._repo.update(
            estimate_id,
            {"lineItems": [line_item_to_dict(i) for i in items], **estimate_totals(items)},
        )
        return await self.get(estimate_id)

    async def update_status(
        self,
        estimate_id: str,
        status: str,
        user: CurrentUser,
        rejection_reason: str | None = None,
    ) -> CostEstimateResult:
        """Move to a new status; approval and rejection record who and when."""
        if status not in CostEstimateStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(CostEstimateStatus.values())}",
                field="status",
            )
        await self.get(estimate_id, user, "update")
        fields: dict[str, Any] = {"status": status}
        if status == CostEstimateStatus.APPROVED.value:
            fields.update(approvedAt=utc_now(), approvedBy=user.uid)
        elif status == CostEstimateStatus.REJECTED.value:
            fields.update(
                rejectedAt=utc_now(),
                rejectedBy=user.uid,
                rejectionReason=rejection_reason or "",
            )
        await self._repo.update(estimate_id, fields)
        return await self.get(estimate_id)

    async def list_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[CostEstimateResult]:
        return await self._repo.page_by_creator(user_id, page_size, start_after_id)
