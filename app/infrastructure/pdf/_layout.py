"""Shared reportlab layout: page template, styles and table styles."""

from __future__ import annotations

import io
import re
from collections.abc import Sequence
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.application.dtos.common import CompanyResult

BRAND = colors.HexColor("#1d4ed8")
MUTED = colors.HexColor("#6b7280")
STRIPE = colors.HexColor("#f3f4f6")
RULE = colors.HexColor("#d1d5db")

_styles = getSampleStyleSheet()

TITLE = ParagraphStyle(
    "DocTitle",
    parent=_styles["Heading1"],
    fontSize=18,
    textColor=BRAND,
    spaceAfter=6,
)
HEADING = ParagraphStyle("DocHeading", parent=_styles["Heading3"], spaceBefore=10, spaceAfter=4)
BODY = _styles["Normal"]
SMALL = ParagraphStyle("DocSmall", parent=_styles["Normal"], fontSize=8, textColor=MUTED)
CELL = ParagraphStyle("DocCell", parent=_styles["Normal"], fontSize=9, leading=11)
HEAD_CELL = ParagraphStyle(
    "DocHeadCell", parent=CELL, textColor=colors.white, fontName="Helvetica-Bold"
)


def text(value: Any, style: ParagraphStyle = BODY) -> Paragraph:
    """Paragraph with the value escaped (Paragraph parses a markup subset)."""
    return Paragraph(escape("" if value is None else str(value)), style)


def header(company: CompanyResult, title: str, number: str | None = None) -> list[Flowable]:
    """Company block followed by the document title and number."""
    story: list[Flowable] = [text(company.name, TITLE)]
    for line in (company.address, company.phone, company.email):
        if line:
            story.append(text(line, SMALL))
    story.append(Spacer(1, 0.25 * inch))
    heading = f"{title} {number}" if number else title
    story.append(text(heading, HEADING))
    return story


def field_table(rows: Sequence[tuple[str, Any]]) -> Table:
    """Two-column label/value table."""
    data = [[text(label, CELL), text(value, CELL)] for label, value in rows]
    table = Table(data, colWidths=[1.8 * inch, 4.7 * inch])
    table.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    return table


def grid_table(head: list[str], rows: list[list[Any]], col_widths: list[float]) -> Table:
    """Header row on the brand colour with striped body rows."""
    data: list[list[Any]] = [[text(h, HEAD_CELL) for h in head]]
    data.extend([[c if isinstance(c, Flowable) else text(c, CELL) for c in row] for row in rows])
    table = Table(data, colWidths=col_widths, repeatRows=1)
    style: list[tuple] = [
        ("BACKGROUND", (0, 0), (-1, 0), BRAND),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("GRID", (0, 0), (-1, -1), 0.5, RULE),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
    ]
    for i in range(2, len(data), 2):
        style.append(("BACKGROUND", (0, i), (-1, i), STRIPE))
    table.setStyle(TableStyle(style))
    return table


def totals_table(rows: Sequence[tuple[str, str]]) -> Table:
    """Right-aligned totals block; the last row is emphasized."""
    table = Table([list(r) for r in rows], colWidths=[4.5 * inch, 2 * inch])
    table.setStyle(
        TableStyle(
            [
                ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("LINEABOVE", (0, -1), (-1, -1), 1, colors.black),
            ]
        )
    )
    return table


def build_pdf(story: list[Flowable], title: str) -> bytes:
    """Render the story on A4 and return the PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=title,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )
    doc.build(story)
    return buffer.getvalue()


def pdf_filename(prefix: str, number: str | None) -> str:
    """Attachment filename from a document number, e.g. "quotation-QT-20240101-1234.pdf"."""
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", number or "").strip("_")
    return f"{prefix}-{safe}.pdf" if safe else f"{prefix}.pdf"
