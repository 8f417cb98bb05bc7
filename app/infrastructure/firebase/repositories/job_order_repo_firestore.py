"""Firestore-backed job order repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.application.dtos.job_order import JobOrderResult
from app.infrastructure.firebase.collections import COLLECTION_JOB_ORDERS
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


class FirestoreJobOrderRepository(FirestoreRepository[JobOrderResult]):
    collection_name = COLLECTION_JOB_ORDERS
    resource_type = "JobOrder"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> JobOrderResult:
        return JobOrderResult(
            id=doc_id,
            job_order_number=as_str(data.get("job_order_number")),
            quotation_id=as_str(data.get("quotation_id")),
            quotation_number=as_str(data.get("quotation_number")),
            client_name=as_str(data.get("client_name")),
            client_email=as_str(data.get("client_email")),
            product_name=as_str(data.get("product_name")),
            product_location=as_str(data.get("product_location")),
            status=as_str(data.get("status")) or "pending",
            start_date=coerce_datetime(data.get("start_date")),
            end_date=coerce_datetime(data.get("end_date")),
            duration_days=as_int(data.get("duration_days")),
            total_amount=as_float(data.get("total_amount")),
            created_by=as_str(data.get("created_by")),
            client_company=as_str(data.get("client_company")),
            site_code=as_str(data.get("site_code")),
            created_by_name=as_str(data.get("created_by_name")),
            assigned_to=data.get("assigned_to"),
            assigned_to_name=data.get("assigned_to_name"),
            notes=as_str(data.get("notes")),
            company_id=data.get("company_id"),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def update(self, job_order_id: str, fields: dict[str, Any]) -> None:
        await self._patch(job_order_id, fields)

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]:
        q = self._coll.where("company_id", "==", company_id).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[JobOrderResult]:
        q = self._coll.where("created_by", "==", user_id).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)
