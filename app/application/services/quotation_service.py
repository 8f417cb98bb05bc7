"""Quotation service: numbering, totals, product enrichment, status and signing."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.quotation import QuotationCreate, QuotationItem, QuotationResult
from app.application.interfaces.repositories import (
    IProductRepository,
    IQuotationRepository,
)
from app.application.services.access import ensure_company_access
from app.application.services.booking_service import CACHE_KEY as BOOKING_CACHE_KEY
from app.application.services.booking_service import booking_from_quotation
from app.application.services.collectible_service import (
    CACHE_KEY as COLLECTIBLE_CACHE_KEY,
)
from app.application.services.collectible_service import collectible_from_quotation_item
from app.application.services.pagination import PageCacheRegistry
from app.domain.billing import calculate_quotation_total
from app.domain.enums import QuotationStatus
from app.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import coerce_datetime, ensure_utc, utc_now
from app.shared.utils.generators import generate_quotation_number

logger = logging.getLogger(__name__)


def _priced_items(
    items: list[QuotationItem], start: datetime, end: datetime
) -> tuple[list[dict[str, Any]], int, float]:
    """Apply the daily-rate rule to each item; return (item dicts, days, total)."""
    totals = calculate_quotation_total(start, end, [{"price": i.price} for i in items])
    priced = []
    for item, item_total in zip(items, totals.item_totals, strict=True):
        priced.append({
            "product_id": item.product_id,
            "name": item.name,
            "location": item.location,
            "price": item.price,
            "site_code": item.site_code,
            "type": item.type,
            "description": item.description,
            "media_url": item.media_url,
            "duration_days": totals.duration_days,
            "item_total_amount": float(item_total),
        })
    return priced, totals.duration_days, float(totals.total_amount)


def _validate_period(start: datetime | None, end: datetime | None) -> None:
    if start is None or end is None:
        raise ValidationException("Start and end dates are required", field="start_date")
    if ensure_utc(end) < ensure_utc(start):
        raise ValidationException("End date must be on or after the start date", field="end_date")


class QuotationService:
    """Quotations for a seller; signing creates collectibles and a booking."""

    def __init__(
        self,
        quotation_repo: IQuotationRepository,
        product_repo: IProductRepository,
        page_caches: PageCacheRegistry,
        validity_days: int = 5,
    ) -> None:
        self._repo = quotation_repo
        self._product_repo = product_repo
        self._page_caches = page_caches
        self._validity_days = validity_days

    async def create(self, data: QuotationCreate, user: CurrentUser) -> QuotationResult:
        """Create a draft quotation numbered ``QT-YYYYMMDD-NNNN``."""
        if not data.items:
            raise ValidationException("At least one site is required", field="items")
        if not data.client_name.strip():
            raise ValidationException("Client name is required", field="client_name")
        _validate_period(data.start_date, data.end_date)
        start, end = ensure_utc(data.start_date), ensure_utc(data.end_date)
        items, days, total = _priced_items(data.items, start, end)
        now = utc_now()
        payload = {
            **data.extra,
            "quotation_number": generate_quotation_number(now),
            "items": items,
            "start_date": start,
            "end_date": end,
            "duration_days": days,
            "total_amount": total,
            "status": QuotationStatus.DRAFT.value,
            "client_name": data.client_name,
            "client_email": data.client_email,
            "client_id": data.client_id,
            "client_company": data.client_company,
            "campaignId": data.campaign_id,
            "proposalId": data.proposal_id,
            "notes": data.notes,
            "seller_id": user.uid,
            "created_by": user.uid,
            "company_id": user.company_id,
            "valid_until": now + timedelta(days=self._validity_days),
        }
        quotation_id = await self._repo.create(payload)
        logger.info("Quotation %s (%s) created", quotation_id, payload["quotation_number"])
        return await self.get(quotation_id)

    async def _load(
        self, quotation_id: str, user: CurrentUser | None, action: str
    ) -> QuotationResult:
        quotation = await self._repo.get_by_id(quotation_id)
        if quotation is None:
            raise ResourceNotFoundException("Quotation", quotation_id)
        if user is not None:
            ensure_company_access("quotation", quotation_id, quotation.company_id, user, action)
        enriched = [await self._enrich(item) for item in quotation.items]
        return replace(quotation, items=enriched)

    async def get(self, quotation_id: str, user: CurrentUser | None = None) -> QuotationResult:
        """Return the quotation with each item filled in from its product.

        With ``user``, a quotation of another company raises AuthorizationException.
        """
        return await self._load(quotation_id, user, "read")

    async def _enrich(self, item: QuotationItem) -> QuotationItem:
        if not item.product_id:
            return item
        product = await self._product_repo.get_by_id(item.product_id)
        if product is None:
            return item
        return replace(
            item,
            name=item.name or product.name,
            location=item.location or product.location,
            site_code=item.site_code or product.site_code,
            type=item.type or product.type,
            description=item.description or product.description,
            price=item.price or product.price,
            media_url=product.media_url or item.media_url,
        )

    async def update(
        self, quotation_id: str, fields: dict[str, Any], user: CurrentUser
    ) -> QuotationResult:
        """Update fields; a changed period or item list re-prices every item."""
        current = await self._load(quotation_id, user, "update")
        fields = dict(fields)
        status = fields.get("status")
        if status is not None and status not in QuotationStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(QuotationStatus.values())}",
                field="status",
            )
        if {"start_date", "end_date", "items"} & fields.keys():
            start = coerce_datetime(fields.get("start_date")) or current.start_date
            end = coerce_datetime(fields.get("end_date")) or current.end_date
            _validate_period(start, end)
            items = fields.get("items")
            item_dtos = current.items if items is None else [QuotationItem(**i) for i in items]
            priced, days, total = _priced_items(item_dtos, start, end)
            fields.update(
                items=priced, start_date=start, end_date=end, duration_days=days, total_amount=total
            )
        fields["updated_by"] = user.uid
        await self._repo.update(quotation_id, fields)
        return await self.get(quotation_id)

    async def update_status(
        self, quotation_id: str, status: str, user: CurrentUser
    ) -> QuotationResult:
        if status not in QuotationStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(QuotationStatus.values())}",
                field="status",
            )
        await self._load(quotation_id, user, "update")
        await self._repo.update(quotation_id, {"status": status, "updated_by": user.uid})
        return await self.get(quotation_id)

    async def list_by_seller(
        self, seller_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]:
        return await self._repo.page_by_seller(seller_id, page_size, start_after_id)

    async def list_by_creator(
        self, user_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[QuotationResult]:
        return await self._repo.page_by_creator(user_id, page_size, start_after_id)

    async def list_by_campaign(self, campaign_id: str) -> list[QuotationResult]:
        return await self._repo.list_by_campaign(campaign_id)

    async def sign(self, quotation_id: str, user: CurrentUser) -> tuple[list[str], str]:
        """Accept the quotation: one collectible per item plus a booking, in one commit.

        Returns:
            (collectible IDs, booking ID)

        Raises:
            InvalidStateException: If the quotation is already accepted, rejected or expired.
        """
        quotation = await self._load(quotation_id, user, "sign")
        if quotation.status in (
            QuotationStatus.ACCEPTED.value,
            QuotationStatus.REJECTED.value,
            QuotationStatus.EXPIRED.value,
        ):
            raise InvalidStateException("Quotation", quotation_id, quotation.status, "sign")
        company_id = quotation.company_id or user.company_id or ""
        collectibles = [
            collectible_from_quotation_item(quotation, item, company_id)
            for item in quotation.items
        ]
        booking = booking_from_quotation(quotation, user)
        result = await self._repo.sign(quotation_id, user.uid, collectibles, booking)
        self._page_caches.invalidate(COLLECTIBLE_CACHE_KEY)
        self._page_caches.invalidate(BOOKING_CACHE_KEY)
        logger.info(
            "Quotation %s signed: %d collectibles, booking %s",
            quotation_id,
            len(result[0]),
            result[1],
        )
        return result
