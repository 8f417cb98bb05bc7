"""Quotation API: create, edit, status, signing and sending to the client."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentUserDep,
    PageParamsDep,
    get_document_email_service,
    get_quotation_service,
)
from app.api.v1.responses import email_outcome_response
from app.application.dtos.quotation import QuotationCreate, QuotationItem
from app.application.services import DocumentEmailService, QuotationService
from app.core.limiter import limit_email, limit_writes
from app.domain.enums import EmailDocumentKind
from app.schemas.common import PageResponse, to_page_response
from app.schemas.email import SendEmailErrorResponse, SendEmailRequest, SendEmailResponse, to_document_request
from app.schemas.quotation import (
    QuotationCreateRequest,
    QuotationResponse,
    QuotationSignResponse,
    QuotationStatusUpdate,
    QuotationUpdate,
    item_fields,
)

router = APIRouter()

QuotationServiceDep = Annotated[QuotationService, Depends(get_quotation_service)]


@router.post("", response_model=QuotationResponse, status_code=201)
@limit_writes
async def create_quotation(
    request: Request,
    body: QuotationCreateRequest,
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    """Create a draft quotation; items are priced over the contract period."""
    data = QuotationCreate(
        client_name=body.client_name,
        client_email=body.client_email,
        start_date=body.start_date,
        end_date=body.end_date,
        items=[QuotationItem(**item.model_dump()) for item in body.items],
        client_id=body.client_id,
        client_company=body.client_company,
        campaign_id=body.campaign_id,
        proposal_id=body.proposal_id,
        notes=body.notes,
    )
    created = await quotation_svc.create(data, current_user)
    return QuotationResponse.model_validate(created)


@router.get("/mine", response_model=PageResponse[QuotationResponse])
async def list_my_quotations(
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
    paging: PageParamsDep,
):
    """Quotations created by the caller, newest first."""
    result = await quotation_svc.list_by_creator(
        current_user.uid, paging.page_size, paging.start_after
    )
    return to_page_response(result, QuotationResponse)


@router.get("/by-seller/{seller_id}", response_model=PageResponse[QuotationResponse])
async def list_seller_quotations(
    seller_id: str,
    _: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
    paging: PageParamsDep,
):
    result = await quotation_svc.list_by_seller(seller_id, paging.page_size, paging.start_after)
    return to_page_response(result, QuotationResponse)


@router.get("/by-campaign/{campaign_id}", response_model=list[QuotationResponse])
async def list_campaign_quotations(
    campaign_id: str,
    _: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    quotations = await quotation_svc.list_by_campaign(campaign_id)
    return [QuotationResponse.model_validate(q) for q in quotations]


@router.get("/{quotation_id}", response_model=QuotationResponse)
async def get_quotation(
    quotation_id: str,
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    return QuotationResponse.model_validate(await quotation_svc.get(quotation_id, current_user))


@router.patch("/{quotation_id}", response_model=QuotationResponse)
@limit_writes
async def update_quotation(
    request: Request,
    quotation_id: str,
    body: QuotationUpdate,
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    fields = body.model_dump(exclude_unset=True, exclude={"items"})
    if body.items is not None:
        fields["items"] = item_fields(body.items)
    updated = await quotation_svc.update(quotation_id, fields, current_user)
    return QuotationResponse.model_validate(updated)


@router.put("/{quotation_id}/status", response_model=QuotationResponse)
@limit_writes
async def update_quotation_status(
    request: Request,
    quotation_id: str,
    body: QuotationStatusUpdate,
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    updated = await quotation_svc.update_status(quotation_id, body.status, current_user)
    return QuotationResponse.model_validate(updated)


@router.post("/{quotation_id}/sign", response_model=QuotationSignResponse)
@limit_writes
async def sign_quotation(
    request: Request,
    quotation_id: str,
    current_user: CurrentUserDep,
    quotation_svc: QuotationServiceDep,
):
    """Accept the quotation, creating one collectible per site and a booking."""
    collectible_ids, booking_id = await quotation_svc.sign(quotation_id, current_user)
    return QuotationSignResponse(
        quotation_id=quotation_id, collectible_ids=collectible_ids, booking_id=booking_id
    )


@router.post(
    "/{quotation_id}/send-email",
    response_model=SendEmailResponse,
    responses={400: {"model": SendEmailErrorResponse}, 500: {"model": SendEmailErrorResponse}},
)
@limit_email
async def send_quotation_email(
    request: Request,
    quotation_id: str,
    body: SendEmailRequest,
    current_user: CurrentUserDep,
    email_svc: Annotated[DocumentEmailService, Depends(get_document_email_service)],
):
    """Email the quotation to the client and mark it sent."""
    outcome = await email_svc.send(
        EmailDocumentKind.QUOTATION, quotation_id, to_document_request(body), current_user
    )
    return email_outcome_response(outcome)
