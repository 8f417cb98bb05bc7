"""PDF rendering, email layouts and local file storage."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.application.dtos.common import CompanyResult
from app.application.dtos.cost_estimate import CostEstimateLineItem, CostEstimateResult
from app.application.dtos.quotation import QuotationItem, QuotationResult
from app.infrastructure.exceptions import (
    StorageNotFoundError,
    StoragePermissionError,
    StorageQuotaExceededError,
)
from app.infrastructure.external.email import EmailTemplateRenderer
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.pdf import ReportlabPdfRenderer
from app.infrastructure.pdf._layout import pdf_filename
from app.infrastructure.pdf.renderer import line_amount

COMPANY = CompanyResult(id="c1", name="OH Plus Media", address="Makati City", phone="02-8888")
MARCH_1 = datetime(2024, 3, 1, tzinfo=timezone.utc)
MARCH_31 = datetime(2024, 3, 31, tzinfo=timezone.utc)


def _estimate(**overrides) -> CostEstimateResult:
    values = {
        "id": "ce1",
        "title": "Cost Estimate for Acme",
        "line_items": [
            CostEstimateLineItem("item_1", "EDSA - QC", 2, 50000, 100000, "media_cost"),
            CostEstimateLineItem("item_2", "Printing", 1, 8000, 8000, "production_cost"),
        ],
        "subtotal": 108000,
        "tax_rate": 0.12,
        "tax_amount": 12960,
        "total_amount": 120960,
        "status": "draft",
        "password": "ABCD1234",
        "client_name": "Acme & Sons <Ltd>",
        "start_date": MARCH_1,
        "end_date": MARCH_31,
    }
    values.update(overrides)
    return CostEstimateResult(**values)


def test_media_line_is_prorated_over_the_period() -> None:
    estimate = _estimate()
    media, production = estimate.line_items
    assert line_amount(media, estimate) == Decimal(100000)
    assert line_amount(production, estimate) == Decimal(8000)


def test_media_line_without_period_uses_stored_total() -> None:
    estimate = _estimate(start_date=None, end_date=None)
    assert line_amount(estimate.line_items[0], estimate) == Decimal(100000)


def test_cost_estimate_pdf() -> None:
    pdf = ReportlabPdfRenderer().cost_estimate(_estimate(notes="Rush job"), COMPANY)
    assert pdf.content.startswith(b"%PDF")
    assert pdf.filename == "cost-estimate-Cost_Estimate_for_Acme.pdf"


def test_quotation_pdf() -> None:
    quotation = QuotationResult(
        id="q1",
        quotation_number="QT-20240301-1234",
        items=[
            QuotationItem(
                product_id="p1",
                name="EDSA Northbound",
                location="",
                price=60000,
                duration_days=45,
                item_total_amount=90000,
            )
        ],
        start_date=MARCH_1,
        end_date=datetime(2024, 4, 15, tzinfo=timezone.utc),
        duration_days=45,
        total_amount=90000,
        status="draft",
        client_name="Acme",
        client_email="buyer@acme.test",
    )
    pdf = ReportlabPdfRenderer(quotation_validity_days=7).quotation(quotation, COMPANY)
    assert pdf.content.startswith(b"%PDF")
    assert pdf.filename == "quotation-QT-20240301-1234.pdf"


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        ("QT-20240101-1234", "report-QT-20240101-1234.pdf"),
        ("a/b c", "report-a_b_c.pdf"),
        (None, "report.pdf"),
    ],
)
def test_pdf_filename(number, expected) -> None:
    assert pdf_filename("report", number) == expected


def test_cost_estimate_email_layout() -> None:
    html = EmailTemplateRenderer().render(
        "CE",
        {
            "company_name": "OH Plus",
            "body_html": "<p>Hello</p>",
            "document_number": "Estimate <1>",
            "total": "PHP 1,120.00",
            "link": "https://app.test/cost-estimates/view/ce1",
            "password": "ABCD1234",
            "sender_name": "Sam",
        },
    )
    assert "<p>Hello</p>" in html
    assert "Estimate &lt;1&gt;" in html
    assert "https://app.test/cost-estimates/view/ce1" in html
    assert "ABCD1234" in html
    assert "Sent by Sam via OH Plus" in html


def test_quotation_email_layout_has_no_link() -> None:
    html = EmailTemplateRenderer().render(
        "quotation",
        {"company_name": "OH Plus", "body_html": "", "document_number": "QT-1", "total": "PHP 0.00"},
    )
    assert "QT-1" in html
    assert "href" not in html


def test_unknown_email_layout() -> None:
    with pytest.raises(KeyError):
        EmailTemplateRenderer().render("invoice", {})


async def test_local_storage_upload_download_delete(tmp_path) -> None:
    storage = LocalStorageService(str(tmp_path), base_url="https://files.test/")

    stored = await storage.upload(b"receipt", "petty_cash/c1/receipt 1.jpg", "image/jpeg")

    assert stored.url == "https://files.test/petty_cash/c1/receipt%201.jpg"
    assert stored.size == 7
    assert await storage.exists("petty_cash/c1/receipt 1.jpg")
    assert await storage.download("petty_cash/c1/receipt 1.jpg") == b"receipt"

    assert await storage.delete("petty_cash/c1/receipt 1.jpg") is True
    assert await storage.delete("petty_cash/c1/receipt 1.jpg") is False
    assert not (tmp_path / "petty_cash").exists()


async def test_local_storage_upload_overwrites(tmp_path) -> None:
    storage = LocalStorageService(str(tmp_path))
    await storage.upload(b"v1", "a/file.txt", "text/plain")
    await storage.upload(b"v2", "a/file.txt", "text/plain")
    assert await storage.download("a/file.txt") == b"v2"


async def test_local_storage_rejects_traversal(tmp_path) -> None:
    storage = LocalStorageService(str(tmp_path / "root"))
    with pytest.raises(StoragePermissionError):
        await storage.upload(b"x", "../escape.txt", "text/plain")
    assert await storage.exists("../escape.txt") is False


async def test_local_storage_limits(tmp_path) -> None:
    storage = LocalStorageService(str(tmp_path), max_size=3)
    with pytest.raises(StorageQuotaExceededError):
        await storage.upload(b"four", "big.bin", "application/octet-stream")
    with pytest.raises(StorageNotFoundError):
        await storage.download("missing.bin")
