"""Finance request API: reimbursements and requisitions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CompanyIdDep, CurrentUserDep, get_finance_request_service
from app.application.dtos.finance_request import FinanceRequestCreate
from app.application.services import FinanceRequestService
from app.core.limiter import limit_writes
from app.schemas.finance import (
    FinanceRequestActionUpdate,
    FinanceRequestCreateRequest,
    FinanceRequestResponse,
)

router = APIRouter()

FinanceRequestServiceDep = Annotated[FinanceRequestService, Depends(get_finance_request_service)]


@router.post("", response_model=FinanceRequestResponse, status_code=201)
@limit_writes
async def create_finance_request(
    request: Request,
    body: FinanceRequestCreateRequest,
    current_user: CurrentUserDep,
    finance_svc: FinanceRequestServiceDep,
):
    created = await finance_svc.create(FinanceRequestCreate(**body.model_dump()), current_user)
    return FinanceRequestResponse.model_validate(created)


@router.get("", response_model=list[FinanceRequestResponse])
async def list_finance_requests(company_id: CompanyIdDep, finance_svc: FinanceRequestServiceDep):
    """Company requests, newest first; deleted ones are left out."""
    requests = await finance_svc.list_by_company(company_id)
    return [FinanceRequestResponse.model_validate(r) for r in requests]


@router.get("/{request_id}", response_model=FinanceRequestResponse)
async def get_finance_request(
    request_id: str, current_user: CurrentUserDep, finance_svc: FinanceRequestServiceDep
):
    return FinanceRequestResponse.model_validate(await finance_svc.get(request_id, current_user))


@router.put("/{request_id}/action", response_model=FinanceRequestResponse)
@limit_writes
async def update_finance_request_action(
    request: Request,
    request_id: str,
    body: FinanceRequestActionUpdate,
    current_user: CurrentUserDep,
    finance_svc: FinanceRequestServiceDep,
):
    updated = await finance_svc.update_action(request_id, body.action, current_user)
    return FinanceRequestResponse.model_validate(updated)


@router.delete("/{request_id}", status_code=204)
@limit_writes
async def delete_finance_request(
    request: Request,
    request_id: str,
    current_user: CurrentUserDep,
    finance_svc: FinanceRequestServiceDep,
):
    await finance_svc.soft_delete(request_id, current_user)
