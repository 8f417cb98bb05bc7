"""Booking API: read-only views of site reservations."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import (
    CompanyIdDep,
    CurrentUserDep,
    PageParamsDep,
    get_booking_service,
)
from app.application.services import BookingService
from app.domain.enums import BookingStatus
from app.schemas.booking import BookingResponse
from app.schemas.common import CountResponse, PageResponse, to_page_response

router = APIRouter()

BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]


@router.get("", response_model=PageResponse[BookingResponse])
async def list_bookings(
    company_id: CompanyIdDep,
    booking_svc: BookingServiceDep,
    paging: PageParamsDep,
    status: BookingStatus = BookingStatus.COMPLETED,
):
    """Company bookings with the given status, newest first (completed by default)."""
    result = await booking_svc.list_page(
        company_id, paging.page, paging.page_size, status=status.value
    )
    return to_page_response(result, BookingResponse)


@router.get("/completed/count", response_model=CountResponse)
async def count_completed_bookings(company_id: CompanyIdDep, booking_svc: BookingServiceDep):
    return CountResponse(count=await booking_svc.count_completed(company_id))


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str, current_user: CurrentUserDep, booking_svc: BookingServiceDep
):
    return BookingResponse.model_validate(await booking_svc.get(booking_id, current_user))
