"""Service assignment and report services with mocked repositories."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.common import CurrentUser
from app.application.dtos.product import ProductResult
from app.application.dtos.report import ReportCreate, ReportResult
from app.application.dtos.service_assignment import (
    RequestedBy,
    ServiceAssignmentCreate,
    ServiceAssignmentResult,
)
from app.application.services import ReportService, ServiceAssignmentService
from app.application.services.service_assignment_service import (
    ASSIGNMENTS_PATH,
    CANCEL_FAILURE_MESSAGE,
    CANCEL_SUCCESS_MESSAGE,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ValidationException,
)

USER = CurrentUser(uid="u1", email="ops@example.com", display_name="Ops", company_id="c1")


def _assignment(**overrides) -> ServiceAssignmentResult:
    values = dict(
        id="sa1",
        sa_number="SA-123456",
        project_site_id="p1",
        project_site_name="EDSA Northbound",
        project_site_location="Quezon City",
        service_type="Installation",
        assigned_to="crew-1",
        job_description="Install new tarp",
        status="Pending",
    )
    values.update(overrides)
    return ServiceAssignmentResult(**values)


def _report(report_id: str = "r1") -> ReportResult:
    return ReportResult(
        id=report_id,
        site_id="p1",
        site_name="EDSA Northbound",
        company_id="c1",
        report_type="completion-report",
        status="draft",
        attachments=[],
        completion_percentage=100,
        tags=[],
        created_by="u1",
    )


# ---- Service assignment cancel ----


async def test_cancel_writes_once_and_redirects() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment(company_id="c1")
    svc = ServiceAssignmentService(repo)

    outcome = await svc.cancel("sa1", USER)

    repo.mark_cancelled.assert_awaited_once_with("sa1", "u1")
    assert outcome.success is True
    assert outcome.message == CANCEL_SUCCESS_MESSAGE
    assert outcome.redirect_to == ASSIGNMENTS_PATH == "/logistics/assignments"


async def test_cancel_failure_reports_error_without_redirect() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment(company_id="c1")
    repo.mark_cancelled.side_effect = RuntimeError("network down")
    svc = ServiceAssignmentService(repo)

    outcome = await svc.cancel("sa1", USER)

    assert outcome.success is False
    assert outcome.message == CANCEL_FAILURE_MESSAGE
    assert outcome.redirect_to is None


@pytest.mark.parametrize(("assignment_id", "user"), [(None, USER), ("", USER), ("sa1", None)])
async def test_cancel_without_id_or_user_writes_nothing(assignment_id, user) -> None:
    repo = AsyncMock()
    svc = ServiceAssignmentService(repo)

    outcome = await svc.cancel(assignment_id, user)

    assert outcome.success is False
    assert outcome.redirect_to is None
    repo.mark_cancelled.assert_not_awaited()


async def test_cancel_of_another_companys_assignment_is_refused() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment(company_id="OTHER")
    svc = ServiceAssignmentService(repo)

    outcome = await svc.cancel("sa1", USER)

    assert outcome.success is False
    assert outcome.message == CANCEL_FAILURE_MESSAGE
    repo.mark_cancelled.assert_not_awaited()


async def test_cancel_of_missing_assignment_is_refused() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = None
    svc = ServiceAssignmentService(repo)

    outcome = await svc.cancel("sa404", USER)

    assert outcome.success is False
    repo.mark_cancelled.assert_not_awaited()


async def test_status_update_of_another_companys_assignment_is_forbidden() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment(company_id="OTHER")
    svc = ServiceAssignmentService(repo)

    with pytest.raises(AuthorizationException):
        await svc.update_status("sa1", "Completed", USER)
    repo.update.assert_not_awaited()


async def test_create_assignment_is_pending_with_sa_number() -> None:
    repo = AsyncMock()
    repo.create.return_value = "sa1"
    repo.get_by_id.return_value = _assignment()
    svc = ServiceAssignmentService(repo)
    data = ServiceAssignmentCreate(
        project_site_id="p1",
        project_site_name="EDSA Northbound",
        project_site_location="Quezon City",
        service_type="Installation",
        assigned_to="crew-1",
        job_description="Install new tarp",
        requested_by=RequestedBy(id="u1", name="Ops", department="Logistics"),
    )

    created = await svc.create(data, USER)

    payload = repo.create.await_args.args[0]
    assert payload["status"] == "Pending"
    assert payload["saNumber"].startswith("SA-")
    assert payload["company_id"] == "c1"
    assert payload["requestedBy"] == {"id": "u1", "name": "Ops", "department": "Logistics"}
    assert created.id == "sa1"


async def test_create_assignment_requires_site() -> None:
    repo = AsyncMock()
    data = ServiceAssignmentCreate(
        project_site_id="",
        project_site_name="",
        project_site_location="",
        service_type="Installation",
        assigned_to="crew-1",
        job_description="",
        requested_by=RequestedBy(id="u1", name="Ops"),
    )
    with pytest.raises(ValidationException):
        await ServiceAssignmentService(repo).create(data, USER)
    repo.create.assert_not_awaited()


# ---- Reports ----


def _report_service():
    report_repo = AsyncMock()
    assignment_repo = AsyncMock()
    product_repo = AsyncMock()
    job_order_repo = AsyncMock()
    svc = ReportService(report_repo, assignment_repo, product_repo, job_order_repo)
    return svc, report_repo, assignment_repo, product_repo


async def test_update_without_report_id_performs_no_write() -> None:
    svc, report_repo, _, _ = _report_service()

    with pytest.raises(ValidationException):
        await svc.update(None, {"status": "posted"}, USER)

    report_repo.update.assert_not_awaited()
    report_repo.get_by_id.assert_not_awaited()


async def test_update_without_user_performs_no_write() -> None:
    svc, report_repo, _, _ = _report_service()

    with pytest.raises(AuthenticationException):
        await svc.update("r1", {"status": "posted"}, None)

    report_repo.update.assert_not_awaited()


async def test_create_without_user_performs_no_write() -> None:
    svc, report_repo, assignment_repo, _ = _report_service()

    with pytest.raises(AuthenticationException):
        await svc.create("sa1", ReportCreate(report_type="progress", date="2024-03-01"), None)

    assignment_repo.get_by_id.assert_not_awaited()
    report_repo.create.assert_not_awaited()


async def test_create_copies_site_and_keeps_complete_attachments() -> None:
    svc, report_repo, assignment_repo, product_repo = _report_service()
    assignment_repo.get_by_id.return_value = _assignment()
    product_repo.get_by_id.return_value = ProductResult(
        id="p1",
        name="EDSA Northbound",
        company_id="c1",
        price=50000,
        location="Quezon City",
        site_code="QC-001",
        type="static",
        description="",
        status="ACTIVE",
        active=True,
        deleted=False,
        position=0,
        seller_id="seller-1",
    )
    report_repo.create.return_value = "r1"
    report_repo.get_by_id.return_value = _report()
    data = ReportCreate(
        report_type="completion-report",
        date="2024-03-01",
        attachments=[
            {"fileName": "after.jpg", "fileUrl": "https://cdn/after.jpg", "fileType": "image"},
            {"fileName": "no-url.jpg"},
        ],
        completion_percentage=100,
        delay_reason="  ",
    )

    await svc.create("sa1", data, USER)

    payload = report_repo.create.await_args.args[0]
    assert payload["siteId"] == "p1"
    assert payload["sellerId"] == "seller-1"
    assert payload["siteCode"] == "QC-001"
    assert payload["status"] == "draft"
    assert payload["attachments"] == [
        {"note": "", "fileName": "after.jpg", "fileType": "image", "fileUrl": "https://cdn/after.jpg"}
    ]
    assert "delayReason" not in payload


async def test_update_stamps_the_editor() -> None:
    svc, report_repo, _, _ = _report_service()
    report_repo.get_by_id.return_value = _report()

    await svc.update("r1", {"status": "posted", "completionPercentage": 80}, USER)

    report_repo.update.assert_awaited_once_with(
        "r1", {"status": "posted", "completionPercentage": 80, "updatedBy": "u1"}
    )
