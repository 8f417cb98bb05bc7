"""Firestore-backed quotation repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.application.dtos.quotation import QuotationItem, QuotationResult
from app.domain.enums import QuotationStatus
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import DocumentNotFoundError
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import (
    COLLECTION_BOOKINGS,
    COLLECTION_COLLECTIBLES,
    COLLECTION_QUOTATIONS,
)
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime
from app.shared.utils.generators import generate_cuid


def _item_from_dict(raw: dict[str, Any]) -> QuotationItem:
    return QuotationItem(
        product_id=as_str(raw.get("product_id") or raw.get("id")),
        name=as_str(raw.get("name")),
        location=as_str(raw.get("location")),
        price=as_float(raw.get("price")),
        site_code=as_str(raw.get("site_code")),
        type=as_str(raw.get("type")),
        description=as_str(raw.get("description")),
        media_url=raw.get("media_url") or None,
        duration_days=as_int(raw.get("duration_days")),
        item_total_amount=as_float(raw.get("item_total_amount")),
    )


class FirestoreQuotationRepository(FirestoreRepository[QuotationResult]):
    """Quotations are listed newest first by seller, campaign or creator."""

    collection_name = COLLECTION_QUOTATIONS
    resource_type = "Quotation"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> QuotationResult:
        return QuotationResult(
            id=doc_id,
            quotation_number=as_str(data.get("quotation_number")),
            items=[_item_from_dict(i) for i in data.get("items") or [] if isinstance(i, dict)],
            start_date=coerce_datetime(data.get("start_date")),
            end_date=coerce_datetime(data.get("end_date")),
            duration_days=as_int(data.get("duration_days")),
            total_amount=as_float(data.get("total_amount")),
            status=as_str(data.get("status")) or QuotationStatus.DRAFT.value,
            client_name=as_str(data.get("client_name")),
            client_email=as_str(data.get("client_email")),
            client_id=data.get("client_id"),
            client_company=as_str(data.get("client_company")),
            seller_id=data.get("seller_id"),
            company_id=data.get("company_id"),
            created_by=data.get("created_by"),
            campaign_id=data.get("campaignId"),
            proposal_id=data.get("proposalId"),
            valid_until=coerce_datetime(data.get("valid_until")),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
            updated_by=data.get("updated_by"),
        )

    async def create(self, data: dict[str, Any]) -> str:
        """Insert a prepared quotation document; return its ID."""
        return await self._insert(data)

    async def update(self, quotation_id: str, fields: dict[str, Any]) -> None:
        await self._patch(quotation_id, fields)

    async def page_by_seller(
        self, seller_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]:
        q = self._coll.where("seller_id", "==", seller_id).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)

    async def list_by_campaign(self, campaign_id: str) -> list[QuotationResult]:
        q = self._coll.where("campaignId", "==", campaign_id).order_by("created", "desc")
        return await self._all(q)

    async def page_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]:
        q = self._coll.where("created_by", "==", user_id).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)

    async def sign(
        self,
        quotation_id: str,
        user_id: str,
        collectibles: list[dict[str, Any]],
        booking: dict[str, Any],
    ) -> tuple[list[str], str]:
        """Accept the quotation and create its collectibles and booking in one commit.

        Returns:
            (collectible IDs, booking ID)

        Raises:
            ResourceNotFoundException: If the quotation does not exist.
        """
        batch = self._client.batch()
        batch.update(
            self._coll.document(quotation_id),
            {
                "status": QuotationStatus.ACCEPTED.value,
                "updated": SERVER_TIMESTAMP,
                "updated_by": user_id,
            },
        )
        collectible_coll = self._client.collection(COLLECTION_COLLECTIBLES)
        collectible_ids: list[str] = []
        for item in collectibles:
            data = dict(item)
            ref = collectible_coll.document(data.pop("id", None) or generate_cuid())
            batch.create(ref, {**data, "created": SERVER_TIMESTAMP, "updated": SERVER_TIMESTAMP})
            collectible_ids.append(ref.id)
        booking_ref = self._client.collection(COLLECTION_BOOKINGS).document(generate_cuid())
        batch.create(
            booking_ref, {**booking, "created": SERVER_TIMESTAMP, "updated": SERVER_TIMESTAMP}
        )
        try:
            await batch.commit()
        except DocumentNotFoundError:
            raise ResourceNotFoundException(self.resource_type, quotation_id) from None
        return collectible_ids, booking_ref.id
