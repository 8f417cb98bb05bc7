"""Quotation, cost estimate, booking and collectible rules with mocked repositories."""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.common import CurrentUser
from app.application.dtos.cost_estimate import (
    CostEstimateLineItem,
    CostEstimateResult,
    SiteForEstimate,
)
from app.application.dtos.quotation import QuotationCreate, QuotationItem, QuotationResult
from app.application.services import CostEstimateService, QuotationService
from app.application.services.booking_service import booking_from_quotation
from app.application.services.collectible_service import collectible_from_quotation_item
from app.application.services.cost_estimate_service import default_line_items
from app.domain.exceptions import (
    AuthorizationException,
    InvalidStateException,
    ValidationException,
)

USER = CurrentUser(uid="seller-1", email="sales@example.com", display_name="Sam", company_id="c1")
START = datetime(2024, 3, 1, tzinfo=timezone.utc)
END = datetime(2024, 3, 31, tzinfo=timezone.utc)


def _quotation(status: str = "sent", items: list[QuotationItem] | None = None) -> QuotationResult:
    return QuotationResult(
        id="q1",
        quotation_number="QT-20240301-4321",
        items=items
        if items is not None
        else [
            QuotationItem(
                product_id="p1",
                name="EDSA Northbound",
                location="Quezon City",
                price=60000,
                duration_days=30,
                item_total_amount=60000,
            )
        ],
        start_date=START,
        end_date=END,
        duration_days=30,
        total_amount=60000,
        status=status,
        client_name="Acme",
        client_email="buyer@acme.test",
        client_company="Acme Corp",
        seller_id="seller-1",
        company_id="c1",
    )


def _quotation_service():
    repo = AsyncMock()
    product_repo = AsyncMock()
    product_repo.get_by_id.return_value = None
    caches = MagicMock()
    return QuotationService(repo, product_repo, caches, validity_days=5), repo, caches


async def test_create_quotation_prices_items_and_numbers_it() -> None:
    svc, repo, _ = _quotation_service()
    repo.create.return_value = "q1"
    repo.get_by_id.return_value = _quotation(status="draft")
    data = QuotationCreate(
        client_name="Acme",
        client_email="buyer@acme.test",
        start_date=START,
        end_date=datetime(2024, 3, 16, tzinfo=timezone.utc),
        items=[QuotationItem(product_id="p1", name="EDSA", location="QC", price=30000)],
    )

    await svc.create(data, USER)

    payload = repo.create.await_args.args[0]
    assert payload["quotation_number"].startswith("QT-")
    assert payload["status"] == "draft"
    assert payload["duration_days"] == 15
    assert payload["total_amount"] == 15000.0
    assert payload["items"][0]["item_total_amount"] == 15000.0
    assert payload["seller_id"] == "seller-1"
    assert payload["valid_until"] is not None


async def test_create_quotation_rejects_reversed_period() -> None:
    svc, repo, _ = _quotation_service()
    data = QuotationCreate(
        client_name="Acme",
        client_email="",
        start_date=END,
        end_date=START,
        items=[QuotationItem(product_id="p1", name="EDSA", location="QC", price=1)],
    )
    with pytest.raises(ValidationException):
        await svc.create(data, USER)
    repo.create.assert_not_awaited()


async def test_sign_creates_collectibles_and_booking_in_one_call() -> None:
    svc, repo, caches = _quotation_service()
    repo.get_by_id.return_value = _quotation()
    repo.sign.return_value = (["col-1"], "bk-1")

    collectible_ids, booking_id = await svc.sign("q1", USER)

    assert (collectible_ids, booking_id) == (["col-1"], "bk-1")
    repo.sign.assert_awaited_once()
    quotation_id, uid, collectibles, booking = repo.sign.await_args.args
    assert (quotation_id, uid) == ("q1", "seller-1")
    assert len(collectibles) == 1
    assert booking["status"] == "RESERVED"
    invalidated = {call.args[0] for call in caches.invalidate.call_args_list}
    assert invalidated == {"collectibles", "booking"}


@pytest.mark.parametrize("status", ["accepted", "rejected", "expired"])
async def test_sign_refuses_closed_quotations(status: str) -> None:
    svc, repo, _ = _quotation_service()
    repo.get_by_id.return_value = _quotation(status=status)

    with pytest.raises(InvalidStateException):
        await svc.sign("q1", USER)
    repo.sign.assert_not_awaited()


async def test_another_companys_quotation_cannot_be_signed_or_updated() -> None:
    svc, repo, caches = _quotation_service()
    repo.get_by_id.return_value = replace(_quotation(), company_id="OTHER")

    with pytest.raises(AuthorizationException):
        await svc.sign("q1", USER)
    with pytest.raises(AuthorizationException):
        await svc.update("q1", {"client_name": "Someone else"}, USER)
    with pytest.raises(AuthorizationException):
        await svc.get("q1", USER)
    repo.sign.assert_not_awaited()
    repo.update.assert_not_awaited()
    caches.invalidate.assert_not_called()


async def test_quotation_without_company_is_open_to_any_user() -> None:
    svc, repo, _ = _quotation_service()
    repo.get_by_id.return_value = replace(_quotation(), company_id=None)

    quotation = await svc.get("q1", USER)

    assert quotation.id == "q1"


def test_booking_from_quotation_cost_details() -> None:
    quotation = _quotation(
        items=[
            QuotationItem(
                product_id="p1",
                name="EDSA",
                location="QC",
                price=60000,
                duration_days=75,
                item_total_amount=150000,
            )
        ]
    )
    booking = booking_from_quotation(quotation, USER)
    details = booking["costDetails"]
    assert details["months"] == 2
    assert details["days"] == 75
    assert details["vatAmount"] == pytest.approx(7200.0)
    assert booking["product_id"] == "p1"
    assert booking["client"]["name"] == "Acme"


def test_collectible_from_quotation_item() -> None:
    quotation = _quotation()
    collectible = collectible_from_quotation_item(
        quotation, quotation.items[0], "c1", document_id="abcd1234"
    )
    assert collectible["id"] == "abcd1234"
    assert collectible["type"] == "sites"
    assert collectible["status"] == "pending"
    assert collectible["total_amount"] == 60000.0
    assert collectible["invoice_no"] == "INV-QT-20240301-4321-1234"
    assert collectible["covered_period"] == "March 1, 2024 - March 31, 2024"


def test_default_line_items_put_media_first() -> None:
    items = default_line_items(
        [SiteForEstimate(product_id="p1", name="EDSA", location="QC", price=50000)]
    )
    assert [i.category for i in items] == [
        "media_cost",
        "production_cost",
        "installation_cost",
        "maintenance_cost",
    ]
    assert items[0].description == "EDSA - QC"
    assert [i.id for i in items] == ["item_1", "item_2", "item_3", "item_4"]


def _estimate() -> CostEstimateResult:
    return CostEstimateResult(
        id="ce1",
        title="Cost Estimate for Acme",
        line_items=[],
        subtotal=0,
        tax_rate=0.12,
        tax_amount=0,
        total_amount=0,
        status="draft",
        password="ABCD1234",
    )


async def test_create_estimate_totals_and_status() -> None:
    repo = AsyncMock()
    repo.create.return_value = "ce1"
    repo.get_by_id.return_value = _estimate()
    svc = CostEstimateService(repo)

    await svc.create_from_products(
        [SiteForEstimate(product_id="p1", name="EDSA", location="QC", price=50000)],
        USER,
        client_name="Acme",
        send_email=True,
    )

    payload = repo.create.await_args.args[0]
    assert payload["status"] == "sent"
    assert payload["subtotal"] == 50000.0
    assert payload["taxAmount"] == pytest.approx(6000.0)
    assert payload["totalAmount"] == pytest.approx(56000.0)
    assert len(payload["password"]) == 8
    assert payload["title"] == "Cost Estimate for Acme"
    assert payload["lineItems"][0]["unitPrice"] == 50000


async def test_update_line_items_recomputes_totals() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _estimate()
    svc = CostEstimateService(repo)
    items = [
        CostEstimateLineItem("item_1", "EDSA", 1, 50000, 50000, "media_cost"),
        CostEstimateLineItem("item_2", "Printing", 2, 2500, 5000, "production_cost"),
    ]

    await svc.update_line_items("ce1", items, USER)

    estimate_id, fields = repo.update.await_args.args
    assert estimate_id == "ce1"
    assert fields["subtotal"] == 55000.0
    assert fields["totalAmount"] == pytest.approx(61600.0)
    assert fields["lineItems"][1]["totalPrice"] == 5000


async def test_invalid_estimate_status_is_rejected() -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException):
        await CostEstimateService(repo).update_status("ce1", "archived", USER)
    repo.update.assert_not_awaited()


async def test_another_companys_estimate_is_not_rewritten() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = replace(_estimate(), company_id="OTHER")
    svc = CostEstimateService(repo)
    items = [CostEstimateLineItem("item_1", "EDSA", 1, 50000, 50000, "media_cost")]

    with pytest.raises(AuthorizationException):
        await svc.update_line_items("ce1", items, USER)
    repo.update.assert_not_awaited()
