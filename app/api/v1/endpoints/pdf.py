"""PDF API: renders a stored document and returns it as a download."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from app.api.v1.dependencies import CurrentUserDep, get_document_pdf_service
from app.api.v1.responses import pdf_response
from app.application.services import DocumentPdfService
from app.core.limiter import limit_writes
from app.schemas.pdf import (
    CostEstimatePdfRequest,
    QuotationPdfRequest,
    ReportPdfRequest,
    ServiceAssignmentPdfRequest,
)

router = APIRouter()

PdfServiceDep = Annotated[DocumentPdfService, Depends(get_document_pdf_service)]

_PDF_RESPONSES = {200: {"content": {"application/pdf": {}}, "description": "PDF document"}}


@router.post("/cost-estimate", response_class=Response, responses=_PDF_RESPONSES)
@limit_writes
async def generate_cost_estimate_pdf(
    request: Request,
    body: CostEstimatePdfRequest,
    current_user: CurrentUserDep,
    pdf_svc: PdfServiceDep,
):
    """Cost estimate with media lines prorated over the contract period."""
    return pdf_response(await pdf_svc.cost_estimate(body.cost_estimate_id, current_user))


@router.post("/quotation", response_class=Response, responses=_PDF_RESPONSES)
@limit_writes
async def generate_quotation_pdf(
    request: Request,
    body: QuotationPdfRequest,
    current_user: CurrentUserDep,
    pdf_svc: PdfServiceDep,
):
    return pdf_response(await pdf_svc.quotation(body.quotation_id, current_user))


@router.post("/service-assignment", response_class=Response, responses=_PDF_RESPONSES)
@limit_writes
async def generate_service_assignment_pdf(
    request: Request,
    body: ServiceAssignmentPdfRequest,
    current_user: CurrentUserDep,
    pdf_svc: PdfServiceDep,
):
    return pdf_response(
        await pdf_svc.service_assignment(body.service_assignment_id, current_user)
    )


@router.post("/report", response_class=Response, responses=_PDF_RESPONSES)
@limit_writes
async def generate_report_pdf(
    request: Request,
    body: ReportPdfRequest,
    current_user: CurrentUserDep,
    pdf_svc: PdfServiceDep,
):
    return pdf_response(await pdf_svc.report(body.report_id, current_user))
