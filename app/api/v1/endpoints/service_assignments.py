"""Service assignment (SA) API: field work on a site, including cancellation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CompanyIdDep,
    CurrentUserDep,
    PageParamsDep,
    get_current_user_optional,
    get_service_assignment_service,
)
from app.application.dtos.common import CurrentUser
from app.application.dtos.service_assignment import RequestedBy, ServiceAssignmentCreate
from app.application.services import ServiceAssignmentService
from app.core.limiter import limit_writes
from app.schemas.common import ActionOutcomeResponse, PageResponse, to_page_response
from app.schemas.service_assignment import (
    ServiceAssignmentCreateRequest,
    ServiceAssignmentResponse,
    ServiceAssignmentStatusUpdate,
)

router = APIRouter()

AssignmentServiceDep = Annotated[
    ServiceAssignmentService, Depends(get_service_assignment_service)
]


@router.post("", response_model=ServiceAssignmentResponse, status_code=201)
@limit_writes
async def create_service_assignment(
    request: Request,
    body: ServiceAssignmentCreateRequest,
    current_user: CurrentUserDep,
    assignment_svc: AssignmentServiceDep,
):
    """Create a Pending SA numbered ``SA-NNNNNN``."""
    data = ServiceAssignmentCreate(
        **body.model_dump(exclude={"requested_by"}),
        requested_by=RequestedBy(**body.requested_by.model_dump()),
    )
    created = await assignment_svc.create(data, current_user)
    return ServiceAssignmentResponse.model_validate(created)


@router.get("", response_model=PageResponse[ServiceAssignmentResponse])
async def list_service_assignments(
    company_id: CompanyIdDep,
    assignment_svc: AssignmentServiceDep,
    paging: PageParamsDep,
):
    result = await assignment_svc.list_by_company(
        company_id, paging.page_size, paging.start_after
    )
    return to_page_response(result, ServiceAssignmentResponse)


@router.get("/{assignment_id}", response_model=ServiceAssignmentResponse)
async def get_service_assignment(
    assignment_id: str,
    current_user: CurrentUserDep,
    assignment_svc: AssignmentServiceDep,
):
    assignment = await assignment_svc.get(assignment_id, current_user)
    return ServiceAssignmentResponse.model_validate(assignment)


@router.put("/{assignment_id}/status", response_model=ServiceAssignmentResponse)
@limit_writes
async def update_service_assignment_status(
    request: Request,
    assignment_id: str,
    body: ServiceAssignmentStatusUpdate,
    current_user: CurrentUserDep,
    assignment_svc: AssignmentServiceDep,
):
    updated = await assignment_svc.update_status(assignment_id, body.status, current_user)
    return ServiceAssignmentResponse.model_validate(updated)


@router.post("/{assignment_id}/cancel", response_model=ActionOutcomeResponse)
@limit_writes
async def cancel_service_assignment(
    request: Request,
    assignment_id: str,
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
    assignment_svc: AssignmentServiceDep,
):
    """Cancel the SA in one write.

    Always answers 200; ``success`` and ``message`` drive the toast, and the
    client follows ``redirect_to`` only on success. Without a signed-in user
    nothing is written.
    """
    outcome = await assignment_svc.cancel(assignment_id, current_user)
    return ActionOutcomeResponse.model_validate(outcome)
