"""Job order API: created from accepted quotations and assigned to crews."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CompanyIdDep,
    CurrentUserDep,
    PageParamsDep,
    get_job_order_service,
)
from app.application.services import JobOrderService
from app.core.limiter import limit_writes
from app.schemas.common import PageResponse, to_page_response
from app.schemas.job_order import (
    JobOrderAssignRequest,
    JobOrderCreateRequest,
    JobOrderResponse,
    JobOrderStatusUpdate,
)

router = APIRouter()

JobOrderServiceDep = Annotated[JobOrderService, Depends(get_job_order_service)]


@router.post("", response_model=JobOrderResponse, status_code=201)
@limit_writes
async def create_job_order(
    request: Request,
    body: JobOrderCreateRequest,
    current_user: CurrentUserDep,
    job_order_svc: JobOrderServiceDep,
):
    """Create a job order (``JO-YYYYMMDD-NNNN``) from an accepted quotation."""
    created = await job_order_svc.create_from_quotation(
        body.quotation_id, current_user, product_id=body.product_id, notes=body.notes
    )
    return JobOrderResponse.model_validate(created)


@router.get("", response_model=PageResponse[JobOrderResponse])
async def list_job_orders(
    company_id: CompanyIdDep,
    job_order_svc: JobOrderServiceDep,
    paging: PageParamsDep,
):
    result = await job_order_svc.list_by_company(company_id, paging.page_size, paging.start_after)
    return to_page_response(result, JobOrderResponse)


@router.get("/mine", response_model=PageResponse[JobOrderResponse])
async def list_my_job_orders(
    current_user: CurrentUserDep,
    job_order_svc: JobOrderServiceDep,
    paging: PageParamsDep,
):
    result = await job_order_svc.list_by_creator(
        current_user.uid, paging.page_size, paging.start_after
    )
    return to_page_response(result, JobOrderResponse)


@router.get("/{job_order_id}", response_model=JobOrderResponse)
async def get_job_order(
    job_order_id: str,
    current_user: CurrentUserDep,
    job_order_svc: JobOrderServiceDep,
):
    return JobOrderResponse.model_validate(await job_order_svc.get(job_order_id, current_user))


@router.put("/{job_order_id}/status", response_model=JobOrderResponse)
@limit_writes
async def update_job_order_status(
    request: Request,
    job_order_id: str,
    body: JobOrderStatusUpdate,
    current_user: CurrentUserDep,
    job_order_svc: JobOrderServiceDep,
):
    updated = await job_order_svc.update_status(job_order_id, body.status, current_user)
    return JobOrderResponse.model_validate(updated)


@router.put("/{job_order_id}/assign", response_model=JobOrderResponse)
@limit_writes
async def assign_job_order(
    request: Request,
    job_order_id: str,
    body: JobOrderAssignRequest,
    current_user: CurrentUserDep,
    job_order_svc: JobOrderServiceDep,
):
    updated = await job_order_svc.assign(
        job_order_id, body.assignee_id, body.assignee_name, current_user
    )
    return JobOrderResponse.model_validate(updated)
