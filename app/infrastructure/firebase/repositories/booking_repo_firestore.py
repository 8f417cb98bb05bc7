"""Firestore-backed booking repository (``booking``)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.booking import BookingResult
from app.application.dtos.common import Page
from app.infrastructure.firebase.collections import COLLECTION_BOOKINGS
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


class FirestoreBookingRepository(FirestoreRepository[BookingResult]):
    collection_name = COLLECTION_BOOKINGS
    resource_type = "Booking"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> BookingResult:
        return BookingResult(
            id=doc_id,
            company_id=as_str(data.get("company_id")),
            product_id=as_str(data.get("product_id")),
            product_name=as_str(data.get("product_name")),
            quotation_id=as_str(data.get("quotation_id")),
            status=as_str(data.get("status")),
            type=as_str(data.get("type")),
            start_date=coerce_datetime(data.get("start_date")),
            end_date=coerce_datetime(data.get("end_date")),
            total_cost=as_float(data.get("total_cost")),
            seller_id=as_str(data.get("seller_id")),
            user_id=as_str(data.get("user_id")),
            client=dict(data.get("client") or {}),
            cost_details=dict(data.get("costDetails") or {}),
            payment_method=as_str(data.get("payment_method")),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    def _by_status(self, company_id: str, status: str):
        return self._coll.where("company_id", "==", company_id).where("status", "==", status)

    async def page_by_status(
        self,
        company_id: str,
        status: str,
        page_size: int,
        start_after_id: str | None = None,
    ) -> Page[BookingResult]:
        q = self._by_status(company_id, status).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)

    async def count_by_status(self, company_id: str, status: str) -> int:
        return await self._by_status(company_id, status).count()

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)
