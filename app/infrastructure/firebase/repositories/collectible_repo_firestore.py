"""Firestore-backed collectible (accounts receivable) repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.collectible import CollectibleResult
from app.application.dtos.common import Page
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import COLLECTION_COLLECTIBLES
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


class FirestoreCollectibleRepository(FirestoreRepository[CollectibleResult]):
    collection_name = COLLECTION_COLLECTIBLES
    resource_type = "Collectible"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> CollectibleResult:
        return CollectibleResult(
            id=doc_id,
            client_name=as_str(data.get("client_name")),
            company_id=as_str(data.get("company_id")),
            type=as_str(data.get("type")),
            net_amount=as_float(data.get("net_amount")),
            total_amount=as_float(data.get("total_amount")),
            invoice_no=as_str(data.get("invoice_no")),
            or_no=as_str(data.get("or_no")),
            bi_no=as_str(data.get("bi_no")),
            booking_no=as_str(data.get("booking_no")),
            mode_of_payment=as_str(data.get("mode_of_payment")),
            status=as_str(data.get("status")) or "pending",
            covered_period=as_str(data.get("covered_period")),
            site=as_str(data.get("site")),
            quotation_id=data.get("quotation_id"),
            quotation_number=data.get("quotation_number"),
            product_id=data.get("product_id"),
            product_name=as_str(data.get("product_name")),
            vendor_name=as_str(data.get("vendor_name")),
            business_address=as_str(data.get("business_address")),
            collection_date=coerce_datetime(data.get("collection_date")),
            deleted=bool(data.get("deleted", False)),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(self, data: dict[str, Any], doc_id: str | None = None) -> str:
        return await self._insert(data, doc_id)

    async def update(self, collectible_id: str, fields: dict[str, Any]) -> None:
        await self._patch(collectible_id, fields)

    async def soft_delete(self, collectible_id: str) -> None:
        await self._patch(collectible_id, {"deleted": True, "date_deleted": SERVER_TIMESTAMP})

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[CollectibleResult]:
        q = (
            self._coll.where("company_id", "==", company_id)
            .where("deleted", "==", False)
            .order_by("created", "desc")
        )
        return await self._page(q, page_size, start_after_id)
