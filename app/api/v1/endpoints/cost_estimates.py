"""Cost estimate API: create from sites, edit lines, approve or reject, send by email."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentUserDep,
    PageParamsDep,
    get_cost_estimate_service,
    get_document_email_service,
)
from app.api.v1.responses import email_outcome_response
from app.application.dtos.cost_estimate import CostEstimateLineItem, SiteForEstimate
from app.application.services import CostEstimateService, DocumentEmailService
from app.core.limiter import limit_email, limit_writes
from app.domain.enums import EmailDocumentKind
from app.schemas.common import PageResponse, to_page_response
from app.schemas.cost_estimate import (
    CostEstimateCreateRequest,
    CostEstimateResponse,
    CostEstimateStatusUpdate,
    LineItemsUpdate,
)
from app.schemas.email import SendEmailErrorResponse, SendEmailRequest, SendEmailResponse, to_document_request

router = APIRouter()

CostEstimateServiceDep = Annotated[CostEstimateService, Depends(get_cost_estimate_service)]


@router.post("", response_model=CostEstimateResponse, status_code=201)
@limit_writes
async def create_cost_estimate(
    request: Request,
    body: CostEstimateCreateRequest,
    current_user: CurrentUserDep,
    estimate_svc: CostEstimateServiceDep,
):
    """Create an estimate with one media line per site plus the default cost lines."""
    created = await estimate_svc.create_from_products(
        [SiteForEstimate(**site.model_dump()) for site in body.sites],
        current_user,
        **body.model_dump(exclude={"sites"}),
    )
    return CostEstimateResponse.model_validate(created)


@router.get("/mine", response_model=PageResponse[CostEstimateResponse])
async def list_my_cost_estimates(
    current_user: CurrentUserDep,
    estimate_svc: CostEstimateServiceDep,
    paging: PageParamsDep,
):
    result = await estimate_svc.list_by_creator(
        current_user.uid, paging.page_size, paging.start_after
    )
    return to_page_response(result, CostEstimateResponse)


@router.get("/{estimate_id}", response_model=CostEstimateResponse)
async def get_cost_estimate(
    estimate_id: str,
    current_user: CurrentUserDep,
    estimate_svc: CostEstimateServiceDep,
):
    return CostEstimateResponse.model_validate(await estimate_svc.get(estimate_id, current_user))


@router.put("/{estimate_id}/line-items", response_model=CostEstimateResponse)
@limit_writes
async def update_line_items(
    request: Request,
    estimate_id: str,
    body: LineItemsUpdate,
    current_user: CurrentUserDep,
    estimate_svc: CostEstimateServiceDep,
):
    items = [CostEstimateLineItem(**item.model_dump()) for item in body.line_items]
    updated = await estimate_svc.update_line_items(estimate_id, items, current_user)
    return CostEstimateResponse.model_validate(updated)


@router.put("/{estimate_id}/status", response_model=CostEstimateResponse)
@limit_writes
async def update_cost_estimate_status(
    request: Request,
    estimate_id: str,
    body: CostEstimateStatusUpdate,
    current_user: CurrentUserDep,
    estimate_svc: CostEstimateServiceDep,
):
    updated = await estimate_svc.update_status(
        estimate_id, body.status, current_user, body.rejection_reason
    )
    return CostEstimateResponse.model_validate(updated)


@router.post(
    "/{estimate_id}/send-email",
    response_model=SendEmailResponse,
    responses={400: {"model": SendEmailErrorResponse}, 500: {"model": SendEmailErrorResponse}},
)
@limit_email
async def send_cost_estimate_email(
    request: Request,
    estimate_id: str,
    body: SendEmailRequest,
    current_user: CurrentUserDep,
    email_svc: Annotated[DocumentEmailService, Depends(get_document_email_service)],
):
    """Email the estimate with its view link and password, and mark it sent."""
    outcome = await email_svc.send(
        EmailDocumentKind.COST_ESTIMATE, estimate_id, to_document_request(body), current_user
    )
    return email_outcome_response(outcome)
