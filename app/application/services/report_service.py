"""Logistics report service: site reports filed against service assignments."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.common import CurrentUser
from app.application.dtos.report import ReportCreate, ReportResult
from app.application.interfaces.repositories import (
    IJobOrderRepository,
    IProductRepository,
    IReportRepository,
    IServiceAssignmentRepository,
)
from app.application.services.access import ensure_company_access
from app.domain.enums import ReportStatus
from app.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def normalize_attachments(attachments: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Keep attachments that have both fileUrl and fileName, in stored form."""
    kept = []
    for attachment in attachments:
        file_url = attachment.get("fileUrl")
        file_name = attachment.get("fileName")
        if not file_url or not file_name:
            continue
        kept.append({
            "note": attachment.get("note") or "",
            "fileName": file_name,
            "fileType": attachment.get("fileType") or "unknown",
            "fileUrl": file_url,
        })
    return kept


def optional_fields(data: ReportCreate) -> dict[str, Any]:
    """Optional report fields, stored only when they have text."""
    candidates = {
        "siteCode": data.site_code,
        "location": data.location,
        "assignedTo": data.assigned_to,
        "installationStatus": data.installation_status,
        "installationTimeline": data.installation_timeline,
        "delayReason": data.delay_reason,
        "delayDays": data.delay_days,
        "descriptionOfWork": data.description_of_work,
    }
    out: dict[str, Any] = {}
    for key, value in candidates.items():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            out[key] = text
    return out


def _check_completion(value: int) -> None:
    if not 0 <= value <= 100:
        raise ValidationException(
            "Completion percentage must be between 0 and 100", field="completion_percentage"
        )


class ReportService:
    def __init__(
        self,
        report_repo: IReportRepository,
        assignment_repo: IServiceAssignmentRepository,
        product_repo: IProductRepository,
        job_order_repo: IJobOrderRepository,
    ) -> None:
        self._repo = report_repo
        self._assignments = assignment_repo
        self._products = product_repo
        self._job_orders = job_order_repo

    async def create(
        self, assignment_id: str | None, data: ReportCreate, user: CurrentUser | None
    ) -> ReportResult:
        """File a report for the site of a service assignment.

        Raises:
            ValidationException: Without an assignment ID or with bad input.
            AuthenticationException: Without a signed-in user.
            ResourceNotFoundException: If the assignment does not exist.
        """
        if not assignment_id:
            raise ValidationException("Assignment ID is required", field="assignment_id")
        if user is None or not user.uid:
            raise AuthenticationException()
        if not data.report_type:
            raise ValidationException("Report type is required", field="report_type")
        _check_completion(data.completion_percentage)

        assignment = await self._assignments.get_by_id(assignment_id)
        if assignment is None:
            raise ResourceNotFoundException("Assignment", assignment_id)
        ensure_company_access(
            "service_assignment", assignment_id, assignment.company_id, user, "report"
        )
        product = await self._products.get_by_id(assignment.project_site_id)
        job_order = (
            await self._job_orders.get_by_id(assignment.job_order_id)
            if assignment.job_order_id
            else None
        )

        payload: dict[str, Any] = {
            "siteId": assignment.project_site_id,
            "siteName": assignment.project_site_name,
            "companyId": user.company_id or assignment.company_id or "",
            "sellerId": (product.seller_id if product else None) or "",
            "client": job_order.client_name if job_order else "",
            "clientId": "",
            "joNumber": job_order.job_order_number if job_order else None,
            "joType": assignment.service_type,
            "serviceAssignmentId": assignment_id,
            "bookingDates": {"start": data.booking_start, "end": data.booking_end},
            "breakdate": "",
            "sales": "",
            "reportType": data.report_type,
            "date": data.date,
            "attachments": normalize_attachments(data.attachments),
            "status": data.status or ReportStatus.DRAFT.value,
            "createdBy": user.uid,
            "createdByName": user.display_name,
            "category": data.category,
            "subcategory": data.subcategory,
            "priority": data.priority,
            "completionPercentage": data.completion_percentage,
            "tags": list(data.tags or []),
        }
        if product is not None:
            payload["product"] = {
                "id": product.id,
                "name": product.name,
                "location": product.location,
            }
            if not data.site_code and product.site_code:
                payload["siteCode"] = product.site_code
        payload.update(optional_fields(data))
        report_id = await self._repo.create(payload)
        logger.info("Report %s created for assignment %s", report_id, assignment_id)
        return await self.get(report_id)

    async def get(
        self, report_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> ReportResult:
        report = await self._repo.get_by_id(report_id)
        if report is None:
            raise ResourceNotFoundException("Report", report_id)
        if user is not None:
            ensure_company_access("report", report_id, report.company_id, user, action)
        return report

    async def update(
        self, report_id: str | None, fields: dict[str, Any], user: CurrentUser | None
    ) -> ReportResult:
        """Update a report; attachments are normalized like on create."""
        if not report_id:
            raise ValidationException("Report ID is required", field="report_id")
        if user is None or not user.uid:
            raise AuthenticationException()
        fields = dict(fields)
        if "completionPercentage" in fields:
            _check_completion(int(fields["completionPercentage"]))
        if "attachments" in fields:
            fields["attachments"] = normalize_attachments(fields["attachments"] or [])
        status = fields.get("status")
        if status is not None and status not in ReportStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(ReportStatus.values())}", field="status"
            )
        await self.get(report_id, user, "update")
        await self._repo.update(report_id, {**fields, "updatedBy": user.uid})
        return await self.get(report_id)

    async def list_by_site(self, site_id: str) -> list[ReportResult]:
        return await self._repo.list_by_site(site_id)
