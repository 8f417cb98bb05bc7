"""Firestore-backed service assignment repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.application.dtos.service_assignment import RequestedBy, ServiceAssignmentResult
from app.domain.enums import ServiceAssignmentStatus
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import COLLECTION_SERVICE_ASSIGNMENTS
from app.infrastructure.firebase.repositories.base import FirestoreRepository, as_str
from app.shared.utils.datetime import coerce_datetime


class FirestoreServiceAssignmentRepository(FirestoreRepository[ServiceAssignmentResult]):
    collection_name = COLLECTION_SERVICE_ASSIGNMENTS
    resource_type = "ServiceAssignment"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ServiceAssignmentResult:
        requested = data.get("requestedBy")
        return ServiceAssignmentResult(
            id=doc_id,
            sa_number=as_str(data.get("saNumber")),
            project_site_id=as_str(data.get("projectSiteId")),
            project_site_name=as_str(data.get("projectSiteName")),
            project_site_location=as_str(data.get("projectSiteLocation")),
            service_type=as_str(data.get("serviceType")),
            assigned_to=as_str(data.get("assignedTo")),
            job_description=as_str(data.get("jobDescription")),
            status=as_str(data.get("status")) or "Pending",
            requested_by=RequestedBy(
                id=as_str(requested.get("id")),
                name=as_str(requested.get("name")),
                department=as_str(requested.get("department")),
            )
            if isinstance(requested, dict)
            else None,
            message=as_str(data.get("message")),
            covered_date_start=coerce_datetime(data.get("coveredDateStart")),
            covered_date_end=coerce_datetime(data.get("coveredDateEnd")),
            alarm_date=coerce_datetime(data.get("alarmDate")),
            alarm_time=as_str(data.get("alarmTime")),
            attachments=list(data.get("attachments") or []),
            service_expenses=list(data.get("serviceExpenses") or []),
            job_order_id=data.get("jobOrderId"),
            company_id=data.get("company_id"),
            cancellation_date=coerce_datetime(data.get("cancellation_date")),
            cancelled_by_uid=data.get("cancelled_by_uid"),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def mark_cancelled(self, assignment_id: str, uid: str) -> None:
        """Cancel in one update: status, server-time cancellation_date and the canceller."""
        await self._coll.document(assignment_id).update({
            "status": ServiceAssignmentStatus.CANCELLED.value,
            "cancellation_date": SERVER_TIMESTAMP,
            "cancelled_by_uid": uid,
        })

    async def update(self, assignment_id: str, fields: dict[str, Any]) -> None:
        await self._patch(assignment_id, fields)

    async def page_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[ServiceAssignmentResult]:
        q = self._coll.where("company_id", "==", company_id).order_by("created", "desc")
        return await self._page(q, page_size, start_after_id)
