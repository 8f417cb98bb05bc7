"""Firestore-backed LED screen schedule repository (``screen_schedule``)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.product import ScreenScheduleResult
from app.infrastructure.firebase.collections import COLLECTION_SCREEN_SCHEDULES
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


class FirestoreScreenScheduleRepository(FirestoreRepository[ScreenScheduleResult]):
    collection_name = COLLECTION_SCREEN_SCHEDULES
    resource_type = "ScreenSchedule"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ScreenScheduleResult:
        duration = data.get("duration")
        return ScreenScheduleResult(
            id=doc_id,
            product_id=as_str(data.get("product_id")),
            spot_number=as_int(data.get("spot_number")),
            media=as_str(data.get("media")),
            status=as_str(data.get("status")) or "active",
            active=bool(data.get("active", True)),
            title=as_str(data.get("title")),
            duration=None if duration is None else as_int(duration),
            company_id=data.get("company_id"),
            created=coerce_datetime(data.get("created")),
        )

    async def list_for_product(self, product_id: str) -> list[ScreenScheduleResult]:
        q = (
            self._coll.where("product_id", "==", product_id)
            .where("deleted", "==", False)
            .order_by("spot_number")
        )
        return await self._all(q)

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def update(self, schedule_id: str, fields: dict[str, Any]) -> None:
        await self._patch(schedule_id, fields)
