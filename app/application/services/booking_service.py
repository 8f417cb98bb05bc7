"""Booking service: bookings created from signed quotations, completed-booking pages."""

from __future__ import annotations

from typing import Any

from app.application.dtos.booking import BookingResult
from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.quotation import QuotationResult
from app.application.interfaces.repositories import IBookingRepository
from app.application.services.access import ensure_company_access
from app.application.services.pagination import CursorPaginator, PageCacheRegistry
from app.domain.billing import DAYS_PER_BILLING_MONTH, VAT_RATE, vat_breakdown
from app.domain.enums import BookingStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException

CACHE_KEY = "booking"


def booking_from_quotation(quotation: QuotationResult, user: CurrentUser) -> dict[str, Any]:
    """Booking document for a signed quotation (first item is the booked site)."""
    if not quotation.items:
        raise ValidationException("Quotation has no items to book", field="items")
    first = quotation.items[0]
    vat = vat_breakdown(quotation.total_amount)
    company_id = quotation.company_id or user.company_id or ""
    return {
        "status": BookingStatus.RESERVED.value,
        "type": "RENTAL",
        "company_id": company_id,
        "client": {
            "company_id": quotation.client_company,
            "id": quotation.client_id or "",
            "name": quotation.client_name,
        },
        "costDetails": {
            "basePrice": first.price,
            "days": first.duration_days,
            "discount": 0,
            "months": first.duration_days // DAYS_PER_BILLING_MONTH,
            "otherFees": 0,
            "pricePerMonth": first.price,
            "total": quotation.total_amount,
            "vatAmount": float(vat.vat),
            "vatRate": float(VAT_RATE),
        },
        "payment_method": "Manual Payment",
        "product_id": first.product_id,
        "product_name": first.name,
        "seller_id": quotation.seller_id or user.uid,
        "start_date": quotation.start_date,
        "end_date": quotation.end_date,
        "total_cost": quotation.total_amount,
        "user_id": user.uid,
        "quotation_id": quotation.id,
        "quotation_number": quotation.quotation_number,
    }


class BookingService:
    def __init__(self, booking_repo: IBookingRepository, page_caches: PageCacheRegistry) -> None:
        self._repo = booking_repo
        self._page_caches = page_caches

    async def create_from_quotation(
        self, quotation: QuotationResult, user: CurrentUser
    ) -> BookingResult:
        """Reserve the quotation's site outside of a signing batch."""
        booking_id = await self._repo.create(booking_from_quotation(quotation, user))
        self._page_caches.invalidate(CACHE_KEY)
        return await self.get(booking_id)

    async def get(self, booking_id: str, user: CurrentUser | None = None) -> BookingResult:
        booking = await self._repo.get_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException("Booking", booking_id)
        if user is not None:
            ensure_company_access("booking", booking_id, booking.company_id, user)
        return booking

    async def list_page(
        self,
        company_id: str,
        page: int,
        page_size: int,
        status: str = BookingStatus.COMPLETED.value,
    ) -> Page[BookingResult]:
        async def fetch(size: int, cursor: str | None) -> Page[BookingResult]:
            return await self._repo.page_by_status(company_id, status, size, cursor)

        cache = self._page_caches.cache_for((CACHE_KEY, company_id, status, page_size))
        return await CursorPaginator(fetch, page_size, cache).get_page(page)

    async def count_completed(self, company_id: str) -> int:
        return await self._repo.count_by_status(company_id, BookingStatus.COMPLETED.value)
