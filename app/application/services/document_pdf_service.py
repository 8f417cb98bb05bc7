"""Loads a document with its company header and hands it to the PDF renderer."""

from __future__ import annotations

import logging

from app.application.dtos.common import CompanyResult, CurrentUser
from app.application.interfaces.repositories import ICompanyRepository
from app.application.interfaces.services import IPdfRenderer, RenderedPdf
from app.application.services.cost_estimate_service import CostEstimateService
from app.application.services.quotation_service import QuotationService
from app.application.services.report_service import ReportService
from app.application.services.service_assignment_service import ServiceAssignmentService

logger = logging.getLogger(__name__)


class DocumentPdfService:
    """PDFs for cost estimates, quotations, service assignments and reports.

    The header uses the document's company, then the caller's company, then
    ``default_company`` (configured name and address) when neither resolves.
    """

    def __init__(
        self,
        renderer: IPdfRenderer,
        company_repo: ICompanyRepository,
        quotation_service: QuotationService,
        cost_estimate_service: CostEstimateService,
        assignment_service: ServiceAssignmentService,
        report_service: ReportService,
        default_company: CompanyResult,
    ) -> None:
        self._renderer = renderer
        self._companies = company_repo
        self._quotations = quotation_service
        self._estimates = cost_estimate_service
        self._assignments = assignment_service
        self._reports = report_service
        self._default_company = default_company

    async def _company(self, company_id: str | None, user: CurrentUser) -> CompanyResult:
        for candidate in (company_id, user.company_id):
            if not candidate:
                continue
            company = await self._companies.get_by_id(candidate)
            if company is not None:
                return company
        return self._default_company

    async def cost_estimate(self, estimate_id: str, user: CurrentUser) -> RenderedPdf:
        estimate = await self._estimates.get(estimate_id, user)
        company = await self._company(estimate.company_id, user)
        pdf = self._renderer.cost_estimate(estimate, company)
        logger.info("Rendered cost estimate PDF %s (%d bytes)", estimate_id, len(pdf.content))
        return pdf

    async def quotation(self, quotation_id: str, user: CurrentUser) -> RenderedPdf:
        quotation = await self._quotations.get(quotation_id, user)
        company = await self._company(quotation.company_id, user)
        pdf = self._renderer.quotation(quotation, company)
        logger.info("Rendered quotation PDF %s (%d bytes)", quotation_id, len(pdf.content))
        return pdf

    async def service_assignment(self, assignment_id: str, user: CurrentUser) -> RenderedPdf:
        assignment = await self._assignments.get(assignment_id, user)
        company = await self._company(assignment.company_id, user)
        return self._renderer.service_assignment(assignment, company)

    async def report(self, report_id: str, user: CurrentUser) -> RenderedPdf:
        report = await self._reports.get(report_id, user)
        company = await self._company(report.company_id, user)
        return self._renderer.report(report, company)
