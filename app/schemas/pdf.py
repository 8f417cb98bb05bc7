"""PDF generation API schemas."""

from pydantic import BaseModel, Field


class CostEstimatePdfRequest(BaseModel):
    cost_estimate_id: str = Field(..., min_length=1)


class QuotationPdfRequest(BaseModel):
    quotation_id: str = Field(..., min_length=1)


class ServiceAssignmentPdfRequest(BaseModel):
    service_assignment_id: str = Field(..., min_length=1)


class ReportPdfRequest(BaseModel):
    report_id: str = Field(..., min_length=1)
