"""reportlab renderers for cost estimates, quotations, service assignments and reports."""

from __future__ import annotations

from decimal import Decimal

from reportlab.lib.units import inch
from reportlab.platypus import Flowable, Spacer

from app.application.dtos.common import CompanyResult
from app.application.dtos.cost_estimate import CostEstimateLineItem, CostEstimateResult
from app.application.dtos.quotation import QuotationResult
from app.application.dtos.report import ReportResult
from app.application.dtos.service_assignment import ServiceAssignmentResult
from app.application.interfaces.services import RenderedPdf
from app.domain.billing import (
    booking_days,
    calculate_prorated_price,
    format_day_count,
    format_duration,
    to_decimal,
    vat_breakdown,
)
from app.domain.enums import CostCategory
from app.infrastructure.pdf._layout import (
    BODY,
    HEADING,
    SMALL,
    build_pdf,
    field_table,
    grid_table,
    header,
    pdf_filename,
    text,
    totals_table,
)
from app.shared.utils.formatting import format_currency, format_long_date, or_na

_CATEGORY_LABELS = {
    CostCategory.MEDIA_COST.value: "Media",
    CostCategory.PRODUCTION_COST.value: "Production",
    CostCategory.INSTALLATION_COST.value: "Installation",
    CostCategory.MAINTENANCE_COST.value: "Maintenance",
    CostCategory.OTHER.value: "Other",
}

_TERMS = [
    "Quotation validity: {validity} working days.",
    "Availability of the site is on first-come-first-served basis only. Only official "
    "documents such as P.O's, Media Orders, signed quotations and contracts are accepted "
    "to book the site.",
    "To book the site, one (1) month advance and two (2) months security deposit payment "
    "dated 7 days before the start of rental is required.",
    "Final artwork should be approved ten (10) days before the contract period.",
    "Print is exclusively for {company} only.",
]


def _terms(company: CompanyResult, validity_days: int) -> list[Flowable]:
    story: list[Flowable] = [text("Terms and Conditions:", HEADING)]
    for n, line in enumerate(_TERMS, start=1):
        story.append(text(f"{n}. {line.format(validity=validity_days, company=company.name)}", SMALL))
    return story


def _signatures(prepared_by: str) -> list[Flowable]:
    table = field_table([("Very truly yours,", "C o n f o r m e:"), (prepared_by, "")])
    return [Spacer(1, 0.3 * inch), table]


def line_amount(
    item: CostEstimateLineItem, estimate: CostEstimateResult
) -> Decimal:
    """Amount of one cost-estimate line.

    Media lines are priced per month, so they are prorated over the booking
    period; other lines are taken at their stored total.
    """
    if (
        item.category == CostCategory.MEDIA_COST.value
        and estimate.start_date is not None
        and estimate.end_date is not None
    ):
        monthly = calculate_prorated_price(item.unit_price, estimate.start_date, estimate.end_date)
        return monthly * item.quantity
    return to_decimal(item.total_price)


class ReportlabPdfRenderer:
    """IPdfRenderer implementation producing A4 documents with reportlab."""

    def __init__(self, quotation_validity_days: int = 5) -> None:
        self._validity_days = quotation_validity_days

    def cost_estimate(
        self, estimate: CostEstimateResult, company: CompanyResult
    ) -> RenderedPdf:
        number = estimate.id
        story = header(company, "Cost Estimate", estimate.title or None)
        story.append(
            field_table(
                [
                    ("Date", format_long_date(estimate.created_at)),
                    ("Client", or_na(estimate.client_name)),
                    ("Company", or_na(estimate.client_company)),
                    ("Email", or_na(estimate.client_email)),
                    ("Reference", number),
                ]
            )
        )
        if estimate.start_date and estimate.end_date:
            days = booking_days(estimate.start_date, estimate.end_date)
            period = (
                f"{format_long_date(estimate.start_date)} to "
                f"{format_long_date(estimate.end_date)} "
                f"({format_duration(days, estimate.start_date, estimate.end_date)})"
            )
            story.append(field_table([("Contract period", period)]))
        story.append(Spacer(1, 0.2 * inch))

        rows = []
        subtotal = Decimal(0)
        for item in estimate.line_items:
            amount = line_amount(item, estimate)
            subtotal += amount
            rows.append(
                [
                    item.description,
                    _CATEGORY_LABELS.get(item.category, item.category),
                    str(item.quantity),
                    f"{format_currency(item.unit_price)} (Exclusive of VAT)",
                    format_currency(amount),
                ]
            )
        story.append(
            grid_table(
                ["Description", "Category", "Qty", "Unit price", "Amount"],
                rows,
                [2.3 * inch, 1 * inch, 0.5 * inch, 1.5 * inch, 1.2 * inch],
            )
        )
        vat = vat_breakdown(subtotal)
        story.append(Spacer(1, 0.15 * inch))
        story.append(
            totals_table(
                [
                    ("Subtotal", format_currency(vat.subtotal)),
                    ("VAT (12%)", format_currency(vat.vat)),
                    ("Total", format_currency(vat.total)),
                ]
            )
        )
        if estimate.notes:
            story.append(text("Notes", HEADING))
            story.append(text(estimate.notes, BODY))
        story.extend(_terms(company, self._validity_days))
        story.extend(_signatures(company.name))
        return RenderedPdf(
            filename=pdf_filename("cost-estimate", estimate.title or number),
            content=build_pdf(story, f"Cost Estimate {estimate.title}"),
        )

    def quotation(self, quotation: QuotationResult, company: CompanyResult) -> RenderedPdf:
        story = header(company, "Quotation", quotation.quotation_number)
        story.append(
            field_table(
                [
                    ("Date", format_long_date(quotation.created)),
                    ("Client", or_na(quotation.client_name)),
                    ("Company", or_na(quotation.client_company)),
                    ("Email", or_na(quotation.client_email)),
                    (
                        "Contract period",
                        f"{format_long_date(quotation.start_date)} to "
                        f"{format_long_date(quotation.end_date)}",
                    ),
                ]
            )
        )
        story.append(Spacer(1, 0.2 * inch))
        rows = []
        subtotal = Decimal(0)
        for item in quotation.items:
            subtotal += to_decimal(item.item_total_amount)
            rows.append(
                [
                    f"{item.name} - {or_na(item.location)}",
                    format_currency(item.price),
                    format_day_count(item.duration_days or quotation.duration_days),
                    format_currency(item.item_total_amount),
                ]
            )
        story.append(
            grid_table(
                ["Site / Location", "Monthly rate", "Duration", "Amount"],
                rows,
                [2.9 * inch, 1.3 * inch, 1.1 * inch, 1.2 * inch],
            )
        )
        vat = vat_breakdown(subtotal)
        story.append(Spacer(1, 0.15 * inch))
        story.append(
            totals_table(
                [
                    ("Subtotal", format_currency(vat.subtotal)),
                    ("VAT (12%)", format_currency(vat.vat)),
                    ("Total", format_currency(vat.total)),
                ]
            )
        )
        story.append(Spacer(1, 0.1 * inch))
        story.append(text(f"Valid until {format_long_date(quotation.valid_until)}", SMALL))
        story.extend(_terms(company, self._validity_days))
        story.extend(_signatures(company.name))
        return RenderedPdf(
            filename=pdf_filename("quotation", quotation.quotation_number),
            content=build_pdf(story, f"Quotation {quotation.quotation_number}"),
        )

    def service_assignment(
        self, assignment: ServiceAssignmentResult, company: CompanyResult
    ) -> RenderedPdf:
        story = header(company, "Service Assignment", assignment.sa_number)
        requested = assignment.requested_by
        story.append(
            field_table(
                [
                    ("Status", assignment.status),
                    ("Site", or_na(assignment.project_site_name)),
                    ("Location", or_na(assignment.project_site_location)),
                    ("Service type", or_na(assignment.service_type)),
                    ("Assigned to", or_na(assignment.assigned_to)),
                    ("Start", format_long_date(assignment.covered_date_start)),
                    ("End", format_long_date(assignment.covered_date_end)),
                    (
                        "Alarm",
                        f"{format_long_date(assignment.alarm_date)} {assignment.alarm_time}".strip(),
                    ),
                    (
                        "Requested by",
                        f"{requested.name} ({requested.department})"
                        if requested and requested.department
                        else or_na(requested.name if requested else None),
                    ),
                ]
            )
        )
        story.append(text("Job description", HEADING))
        story.append(text(or_na(assignment.job_description), BODY))
        if assignment.message:
            story.append(text("Message", HEADING))
            story.append(text(assignment.message, BODY))
        if assignment.service_expenses:
            rows = [
                [or_na(e.get("name")), format_currency(to_decimal(e.get("amount")))]
                for e in assignment.service_expenses
            ]
            story.append(text("Service expenses", HEADING))
            story.append(grid_table(["Item", "Amount"], rows, [4.5 * inch, 2 * inch]))
        return RenderedPdf(
            filename=pdf_filename("service-assignment", assignment.sa_number),
            content=build_pdf(story, f"Service Assignment {assignment.sa_number}"),
        )

    def report(self, report: ReportResult, company: CompanyResult) -> RenderedPdf:
        title = f"{report.report_type.replace('-', ' ').title()} Report"
        story = header(company, title)
        story.append(
            field_table(
                [
                    ("Date", format_long_date(report.date or report.created)),
                    ("Site", or_na(report.site_name)),
                    ("Site code", or_na(report.site_code)),
                    ("Location", or_na(report.location)),
                    ("Client", or_na(report.client)),
                    ("Job order", or_na(report.jo_number)),
                    ("Status", report.status),
                    ("Completion", f"{report.completion_percentage}%"),
                    ("Installation status", or_na(report.installation_status)),
                    ("Prepared by", or_na(report.created_by_name)),
                ]
            )
        )
        if report.description_of_work:
            story.append(text("Description of work", HEADING))
            story.append(text(report.description_of_work, BODY))
        if report.delay_reason:
            story.append(text("Delay", HEADING))
            story.append(
                text(f"{report.delay_reason} ({or_na(report.delay_days)} day(s))", BODY)
            )
        if report.attachments:
            story.append(text("Attachments", HEADING))
            rows = [[a.file_name, a.file_type, or_na(a.note)] for a in report.attachments]
            story.append(
                grid_table(["File", "Type", "Note"], rows, [2.8 * inch, 1.2 * inch, 2.5 * inch])
            )
        return RenderedPdf(
            filename=pdf_filename("report", report.id),
            content=build_pdf(story, title),
        )
