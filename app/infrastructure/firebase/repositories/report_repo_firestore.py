"""Firestore-backed logistics report repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.report import ReportAttachment, ReportResult
from app.infrastructure.firebase.collections import COLLECTION_REPORTS
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


def _attachment(raw: dict[str, Any]) -> ReportAttachment:
    return ReportAttachment(
        note=as_str(raw.get("note")),
        file_name=as_str(raw.get("fileName")),
        file_type=as_str(raw.get("fileType")) or "unknown",
        file_url=as_str(raw.get("fileUrl")),
    )


class FirestoreReportRepository(FirestoreRepository[ReportResult]):
    collection_name = COLLECTION_REPORTS
    resource_type = "Report"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ReportResult:
        booking = data.get("bookingDates") or {}
        return ReportResult(
            id=doc_id,
            site_id=as_str(data.get("siteId")),
            site_name=as_str(data.get("siteName")),
            company_id=as_str(data.get("companyId")),
            report_type=as_str(data.get("reportType")),
            status=as_str(data.get("status")) or "draft",
            attachments=[_attachment(a) for a in data.get("attachments") or [] if isinstance(a, dict)],
            completion_percentage=as_int(data.get("completionPercentage")),
            tags=list(data.get("tags") or []),
            created_by=as_str(data.get("createdBy")),
            created_by_name=as_str(data.get("createdByName")),
            client=as_str(data.get("client")),
            client_id=as_str(data.get("clientId")),
            seller_id=as_str(data.get("sellerId")),
            booking_start=as_str(booking.get("start")),
            booking_end=as_str(booking.get("end")),
            jo_number=data.get("joNumber"),
            service_assignment_id=data.get("serviceAssignmentId"),
            category=as_str(data.get("category")),
            subcategory=as_str(data.get("subcategory")),
            priority=as_str(data.get("priority")),
            date=as_str(data.get("date")),
            site_code=data.get("siteCode"),
            location=data.get("location"),
            assigned_to=data.get("assignedTo"),
            installation_status=data.get("installationStatus"),
            installation_timeline=data.get("installationTimeline"),
            delay_reason=data.get("delayReason"),
            delay_days=data.get("delayDays"),
            description_of_work=data.get("descriptionOfWork"),
            product=data.get("product"),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def update(self, report_id: str, fields: dict[str, Any]) -> None:
        await self._patch(report_id, fields)

    async def list_by_site(self, site_id: str) -> list[ReportResult]:
        q = self._coll.where("siteId", "==", site_id).order_by("created", "desc")
        return await self._all(q)
