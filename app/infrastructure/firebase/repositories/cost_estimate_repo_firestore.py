"""Firestore-backed cost estimate repository (camelCase fields, createdAt/updatedAt)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.application.dtos.cost_estimate import CostEstimateLineItem, CostEstimateResult
from app.infrastructure.firebase.collections import COLLECTION_COST_ESTIMATES
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


def _line_item(raw: dict[str, Any]) -> CostEstimateLineItem:
    return CostEstimateLineItem(
        id=as_str(raw.get("id")),
        description=as_str(raw.get("description")),
        quantity=as_int(raw.get("quantity"), 1),
        unit_price=as_float(raw.get("unitPrice")),
        total_price=as_float(raw.get("totalPrice")),
        category=as_str(raw.get("category")) or "other",
        notes=as_str(raw.get("notes")),
    )


class FirestoreCostEstimateRepository(FirestoreRepository[CostEstimateResult]):
    collection_name = COLLECTION_COST_ESTIMATES
    resource_type = "CostEstimate"
    created_field = "createdAt"
    updated_field = "updatedAt"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> CostEstimateResult:
        return CostEstimateResult(
            id=doc_id,
            title=as_str(data.get("title")),
            line_items=[_line_item(i) for i in data.get("lineItems") or [] if isinstance(i, dict)],
            subtotal=as_float(data.get("subtotal")),
            tax_rate=as_float(data.get("taxRate")),
            tax_amount=as_float(data.get("taxAmount")),
            total_amount=as_float(data.get("totalAmount")),
            status=as_str(data.get("status")) or "draft",
            password=as_str(data.get("password")),
            client_name=as_str(data.get("clientName")),
            client_email=as_str(data.get("clientEmail")),
            client_company=as_str(data.get("clientCompany")),
            client_id=data.get("clientId"),
            company_id=data.get("company_id"),
            proposal_id=data.get("proposalId"),
            start_date=coerce_datetime(data.get("startDate")),
            end_date=coerce_datetime(data.get("endDate")),
            notes=as_str(data.get("notes")),
            created_by=data.get("createdBy"),
            approved_at=coerce_datetime(data.get("approvedAt")),
            approved_by=data.get("approvedBy"),
            rejected_at=coerce_datetime(data.get("rejectedAt")),
            rejected_by=data.get("rejectedBy"),
            rejection_reason=data.get("rejectionReason"),
            created_at=coerce_datetime(data.get("createdAt")),
            updated_at=coerce_datetime(data.get("updatedAt")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def update(self, estimate_id: str, fields: dict[str, Any]) -> None:
        await self._patch(estimate_id, fields)

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[CostEstimateResult]:
        q = self._coll.where("createdBy", "==", user_id).order_by("createdAt", "desc")
        return await self._page(q, page_size, start_after_id)
