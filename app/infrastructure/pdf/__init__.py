"""Server-side PDF generation (reportlab)."""

from app.infrastructure.pdf.renderer import ReportlabPdfRenderer, line_amount

__all__ = ["ReportlabPdfRenderer", "line_amount"]
