"""LED screen schedule service: content spots per site."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import CurrentUser
from app.application.dtos.product import ScreenScheduleResult
from app.application.interfaces.repositories import IScreenScheduleRepository
from app.domain.exceptions import ResourceNotFoundException, ValidationException


class ScreenScheduleService:
    def __init__(self, schedule_repo: IScreenScheduleRepository) -> None:
        self._repo = schedule_repo

    async def list_for_product(self, product_id: str) -> list[ScreenScheduleResult]:
        """Spots of a site ordered by spot number, excluding deleted ones."""
        return await self._repo.list_for_product(product_id)

    async def create(
        self,
        product_id: str,
        spot_number: int,
        media: str,
        user: CurrentUser,
        title: str = "",
        duration: int | None = None,
    ) -> ScreenScheduleResult:
        if not product_id:
            raise ValidationException("product_id is required", field="product_id")
        if spot_number < 1:
            raise ValidationException("spot_number must be at least 1", field="spot_number")
        payload: dict[str, Any] = {
            "product_id": product_id,
            "spot_number": spot_number,
            "media": media,
            "title": title,
            "duration": duration,
            "company_id": user.company_id,
            "seller_id": user.uid,
            "deleted": False,
            "active": True,
            "status": "active",
        }
        schedule_id = await self._repo.create(payload)
        schedule = await self._repo.get_by_id(schedule_id)
        if schedule is None:
            raise ResourceNotFoundException("ScreenSchedule", schedule_id)
        return schedule

    async def delete(self, schedule_id: str) -> None:
        if await self._repo.get_by_id(schedule_id) is None:
            raise ResourceNotFoundException("ScreenSchedule", schedule_id)
        await self._repo.update(schedule_id, {"deleted": True, "active": False})
