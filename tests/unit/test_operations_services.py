"""Petty cash, finance requests and job orders with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.common import CurrentUser
from app.application.dtos.finance_request import FinanceRequestCreate
from app.application.dtos.petty_cash import PettyCashConfig, PettyCashCycle
from app.application.dtos.quotation import QuotationItem, QuotationResult
from app.application.interfaces.services import StoredObject
from app.application.services import (
    FinanceRequestService,
    JobOrderService,
    PettyCashService,
    QuotationService,
)
from app.application.services.petty_cash_service import UploadedFile, format_cycle_no
from app.domain.exceptions import ValidationException

USER = CurrentUser(uid="u1", email="ops@ohplus.test", display_name="Olive", company_id="c1")


def _cycle(status: str = "active", total: float = 0, cycle_no: int = 3) -> PettyCashCycle:
    return PettyCashCycle(id="cy3", company_id="c1", cycle_no=cycle_no, total=total, status=status)


def _petty_cash():
    configs, cycles, expenses, storage = AsyncMock(), AsyncMock(), AsyncMock(), AsyncMock()
    return PettyCashService(configs, cycles, expenses, storage), configs, cycles, expenses, storage


def test_cycle_numbers_are_zero_padded() -> None:
    assert format_cycle_no(7) == "0007"


async def test_config_warning_cannot_exceed_fund() -> None:
    svc, configs, *_ = _petty_cash()
    with pytest.raises(ValidationException):
        await svc.save_config("c1", 1000, 5000)
    configs.save.assert_not_awaited()


async def test_expense_uploads_receipts_and_leaves_the_total_to_the_repository() -> None:
    svc, _, cycles, expenses, storage = _petty_cash()
    cycles.latest.return_value = _cycle(total=150.5)
    storage.upload.return_value = StoredObject(
        path="p", url="https://files.test/r.jpg", size=3, content_type="image/jpeg"
    )
    expenses.create.return_value = "ex1"

    await svc.add_expense(
        "c1", "Fuel", 200, "Driver", USER, [UploadedFile("r.jpg", b"jpg", "image/jpeg")]
    )

    assert storage.upload.await_args.args[1] == "petty-cash/c1/cy3/r.jpg"
    payload = expenses.create.await_args.args[0]
    assert payload["attachment"] == ["https://files.test/r.jpg"]
    assert payload["cycle_id"] == "cy3"
    assert payload["amount"] == 200.0
    cycles.update.assert_not_awaited()


async def test_expense_needs_a_cycle() -> None:
    svc, _, cycles, expenses, _ = _petty_cash()
    cycles.latest.return_value = None
    with pytest.raises(ValidationException):
        await svc.add_expense("c1", "Fuel", 200, "Driver", USER)
    expenses.create.assert_not_awaited()


async def test_replenish_closes_active_cycle_and_opens_next() -> None:
    svc, configs, cycles, *_ = _petty_cash()
    configs.get_by_id.return_value = PettyCashConfig("c1", 10000, 2000)
    cycles.latest.return_value = _cycle()
    cycles.create.return_value = "cy4"

    await svc.replenish("c1")

    cycles.update.assert_awaited_once_with("cy3", {"status": "completed"})
    cycles.create.assert_awaited_once_with("c1", 4)


async def test_summary_flags_low_balance() -> None:
    svc, configs, cycles, expenses, _ = _petty_cash()
    configs.get_by_id.return_value = PettyCashConfig("c1", 10000, 2000)
    cycles.list_by_company.return_value = [_cycle(total=8500), _cycle("completed", 9000, 2)]
    expenses.list_by_cycle.return_value = []

    summary = await svc.summary("c1")

    assert summary.on_hand == 1500.0
    assert summary.below_warning is True
    assert len(summary.cycles) == 2


async def test_requisition_payload_uses_sheet_labels() -> None:
    repo = AsyncMock()
    repo.create.return_value = "fr1"
    svc = FinanceRequestService(repo)

    await svc.create(
        FinanceRequestCreate(
            request_type="requisition",
            requestor="Olive",
            requested_item="Tarpaulin",
            amount=4500,
            request_no=123456,
            cashback=50,
        ),
        USER,
    )

    payload = repo.create.await_args.args[0]
    assert payload["Request No."] == 123456
    assert payload["Requested Item"] == "Tarpaulin"
    assert payload["Cashback"] == 50
    assert payload["Actions"] == "Pending"
    assert "Date Released" not in payload


async def test_finance_request_type_is_checked() -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException):
        await FinanceRequestService(repo).create(
            FinanceRequestCreate(
                request_type="loan", requestor="Olive", requested_item="x", amount=1
            ),
            USER,
        )
    repo.create.assert_not_awaited()


def _job_orders(items: list[QuotationItem]):
    quotation_repo = AsyncMock()
    quotation_repo.get_by_id.return_value = QuotationResult(
        id="q1",
        quotation_number="QT-20240301-0001",
        items=items,
        start_date=None,
        end_date=None,
        duration_days=30,
        total_amount=90000,
        status="accepted",
        client_name="Acme",
        client_email="buyer@acme.test",
    )
    product_repo = AsyncMock()
    product_repo.get_by_id.return_value = None
    quotations = QuotationService(quotation_repo, product_repo, MagicMock())
    repo = AsyncMock()
    repo.create.return_value = "jo1"
    return JobOrderService(repo, quotations), repo


async def test_job_order_for_a_chosen_site() -> None:
    items = [
        QuotationItem(product_id="p1", name="EDSA", location="QC", price=30000),
        QuotationItem(
            product_id="p2", name="C5", location="Pasig", price=60000, item_total_amount=60000
        ),
    ]
    svc, repo = _job_orders(items)

    await svc.create_from_quotation("q1", USER, product_id="p2")

    payload = repo.create.await_args.args[0]
    assert payload["job_order_number"].startswith("JO-")
    assert payload["product_id"] == "p2"
    assert payload["total_amount"] == 60000
    assert payload["status"] == "pending"


async def test_job_order_site_must_be_on_the_quotation() -> None:
    svc, repo = _job_orders([QuotationItem(product_id="p1", name="EDSA", location="QC", price=1)])
    with pytest.raises(ValidationException):
        await svc.create_from_quotation("q1", USER, product_id="p9")
    repo.create.assert_not_awaited()


async def test_assigning_moves_job_order_in_progress() -> None:
    svc, repo = _job_orders([])
    await svc.assign("jo1", "crew-7", "Crew Seven", USER)
    fields = repo.update.await_args.args[1]
    assert fields["status"] == "in_progress"
    assert fields["assigned_to"] == "crew-7"
