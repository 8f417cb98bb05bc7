"""Service assignment (SA) service: create, read and cancel logistics work orders."""

from __future__ import annotations

import logging

from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.service_assignment import (
    CancelOutcome,
    ServiceAssignmentCreate,
    ServiceAssignmentResult,
)
from app.application.interfaces.repositories import IServiceAssignmentRepository
from app.application.services.access import ensure_company_access
from app.domain.enums import ServiceAssignmentStatus
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.generators import generate_sa_number

logger = logging.getLogger(__name__)

CANCEL_SUCCESS_MESSAGE = "Service assignment has been cancelled successfully."
CANCEL_FAILURE_MESSAGE = "Failed to cancel service assignment. Please try again."
ASSIGNMENTS_PATH = "/logistics/assignments"


class ServiceAssignmentService:
    def __init__(self, assignment_repo: IServiceAssignmentRepository) -> None:
        self._repo = assignment_repo

    async def create(
        self, data: ServiceAssignmentCreate, user: CurrentUser
    ) -> ServiceAssignmentResult:
        """Create a Pending SA numbered ``SA-NNNNNN``."""
        for field, value in (
            ("project_site_id", data.project_site_id),
            ("service_type", data.service_type),
            ("assigned_to", data.assigned_to),
        ):
            if not value:
                raise ValidationException(f"{field} is required", field=field)
        if (
            data.covered_date_start
            and data.covered_date_end
            and data.covered_date_end < data.covered_date_start
        ):
            raise ValidationException(
                "Covered end date must be on or after the start date", field="covered_date_end"
            )
        payload = {
            "saNumber": generate_sa_number(),
            "projectSiteId": data.project_site_id,
            "projectSiteName": data.project_site_name,
            "projectSiteLocation": data.project_site_location,
            "serviceType": data.service_type,
            "assignedTo": data.assigned_to,
            "jobDescription": data.job_description,
            "requestedBy": {
                "id": data.requested_by.id,
                "name": data.requested_by.name,
                "department": data.requested_by.department,
            },
            "message": data.message,
            "coveredDateStart": data.covered_date_start,
            "coveredDateEnd": data.covered_date_end,
            "alarmDate": data.alarm_date,
            "alarmTime": data.alarm_time,
            "attachments": data.attachments,
            "serviceExpenses": data.service_expenses,
            "jobOrderId": data.job_order_id,
            "status": ServiceAssignmentStatus.PENDING.value,
            "company_id": user.company_id,
            "created_by": user.uid,
        }
        assignment_id = await self._repo.create(payload)
        logger.info("Service assignment %s (%s) created", assignment_id, payload["saNumber"])
        return await self.get(assignment_id)

    async def get(
        self, assignment_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> ServiceAssignmentResult:
        assignment = await self._repo.get_by_id(assignment_id)
        if assignment is None:
            raise ResourceNotFoundException("ServiceAssignment", assignment_id)
        if user is not None:
            ensure_company_access(
                "service_assignment", assignment_id, assignment.company_id, user, action
            )
        return assignment

    async def update_status(
        self, assignment_id: str, status: str, user: CurrentUser
    ) -> ServiceAssignmentResult:
        if status not in ServiceAssignmentStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(ServiceAssignmentStatus.values())}",
                field="status",
            )
        await self.get(assignment_id, user, "update")
        await self._repo.update(assignment_id, {"status": status, "updated_by": user.uid})
        return await self.get(assignment_id)

    async def list_by_company(
        self, company_id: str, page_size: int, start_after_id: str | None = None
    ) -> Page[ServiceAssignmentResult]:
        return await self._repo.page_by_company(company_id, page_size, start_after_id)

    async def cancel(self, assignment_id: str | None, user: CurrentUser | None) -> CancelOutcome:
        """Cancel an SA with a single update.

        Errors are reported in the outcome rather than raised, so the caller
        can show the message and only redirect on success. Nothing is written
        without an ID or a signed-in user, or for an SA of another company.
        """
        if not assignment_id or user is None or not user.uid:
            return CancelOutcome(success=False, message=CANCEL_FAILURE_MESSAGE)
        try:
            await self.get(assignment_id, user, "cancel")
            await self._repo.mark_cancelled(assignment_id, user.uid)
        except (ResourceNotFoundException, AuthorizationException) as e:
            logger.warning("Cancel of service assignment %s refused: %s", assignment_id, e.message)
            return CancelOutcome(success=False, message=CANCEL_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Cancelling service assignment %s failed", assignment_id)
            return CancelOutcome(success=False, message=CANCEL_FAILURE_MESSAGE)
        logger.info("Service assignment %s cancelled by %s", assignment_id, user.uid)
        return CancelOutcome(
            success=True, message=CANCEL_SUCCESS_MESSAGE, redirect_to=ASSIGNMENTS_PATH
        )
