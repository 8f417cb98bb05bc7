"""Collectible (accounts receivable) service."""

from __future__ import annotations

from typing import Any

from app.application.dtos.collectible import CollectibleResult
from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.quotation import QuotationItem, QuotationResult
from app.application.interfaces.repositories import ICollectibleRepository
from app.application.services.access import ensure_company_access
from app.application.services.pagination import CursorPaginator, PageCacheRegistry
from app.domain.billing import DAYS_PER_BILLING_MONTH, to_decimal
from app.domain.enums import CollectibleStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.formatting import format_long_date
from app.shared.utils.generators import generate_cuid, receivable_numbers

CACHE_KEY = "collectibles"


def collectible_from_quotation_item(
    quotation: QuotationResult,
    item: QuotationItem,
    company_id: str,
    document_id: str | None = None,
) -> dict[str, Any]:
    """Collectible document for one item of a signed quotation.

    The returned dict carries its own ``id`` so the receivable numbers can
    reference it before the document exists.
    """
    document_id = document_id or generate_cuid()
    if item.item_total_amount:
        amount = to_decimal(item.item_total_amount)
    else:
        amount = to_decimal(item.price) * (item.duration_days or DAYS_PER_BILLING_MONTH)
    period = f"{format_long_date(quotation.start_date)} - {format_long_date(quotation.end_date)}"
    return {
        "id": document_id,
        "client_name": quotation.client_name,
        "company_id": company_id,
        "type": "sites",
        "net_amount": float(amount),
        "total_amount": float(amount),
        **receivable_numbers(quotation.quotation_number, document_id),
        "mode_of_payment": "",
        "status": CollectibleStatus.PENDING.value,
        "covered_period": period,
        "site": item.location or item.name,
        "quotation_id": quotation.id,
        "quotation_number": quotation.quotation_number,
        "product_id": item.product_id,
        "product_name": item.name,
        "vendor_name": quotation.client_company,
        "business_address": "",
        "collection_date": quotation.end_date,
        "deleted": False,
    }


class CollectibleService:
    def __init__(
        self, collectible_repo: ICollectibleRepository, page_caches: PageCacheRegistry
    ) -> None:
        self._repo = collectible_repo
        self._page_caches = page_caches

    async def create_from_quotation_item(
        self, quotation: QuotationResult, item: QuotationItem, company_id: str
    ) -> CollectibleResult:
        data = collectible_from_quotation_item(quotation, item, company_id)
        doc_id = data.pop("id")
        await self._repo.create(data, doc_id)
        self._page_caches.invalidate(CACHE_KEY)
        created = await self._repo.get_by_id(doc_id)
        if created is None:
            raise ResourceNotFoundException("Collectible", doc_id)
        return created

    async def get(
        self, collectible_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> CollectibleResult:
        collectible = await self._repo.get_by_id(collectible_id)
        if collectible is None or collectible.deleted:
            raise ResourceNotFoundException("Collectible", collectible_id)
        if user is not None:
            ensure_company_access(
                "collectible", collectible_id, collectible.company_id, user, action
            )
        return collectible

    async def update(
        self, collectible_id: str, fields: dict[str, Any], user: CurrentUser | None = None
    ) -> CollectibleResult:
        status = fields.get("status")
        if status is not None and status not in CollectibleStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(CollectibleStatus.values())}",
                field="status",
            )
        await self.get(collectible_id, user, "update")
        await self._repo.update(collectible_id, fields)
        self._page_caches.invalidate(CACHE_KEY)
        return await self.get(collectible_id)

    async def soft_delete(self, collectible_id: str, user: CurrentUser | None = None) -> None:
        await self.get(collectible_id, user, "delete")
        await self._repo.soft_delete(collectible_id)
        self._page_caches.invalidate(CACHE_KEY)

    async def list_by_company(
        self, company_id: str, page: int, page_size: int
    ) -> Page[CollectibleResult]:
        async def fetch(size: int, cursor: str | None) -> Page[CollectibleResult]:
            return await self._repo.page_by_company(company_id, size, cursor)

        cache = self._page_caches.cache_for((CACHE_KEY, company_id, page_size))
        return await CursorPaginator(fetch, page_size, cache).get_page(page)
