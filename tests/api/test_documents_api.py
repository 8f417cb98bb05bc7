"""HTTP behaviour of the document, logistics and site-control routes.

Firestore-backed services are swapped for mocks via dependency_overrides.
"""

from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_document_email_service,
    get_document_pdf_service,
    get_player_control,
    get_product_service,
    get_quotation_service,
    get_service_assignment_service,
)
from app.application.dtos.email import EmailOutcome
from app.application.dtos.product import ProductResult
from app.application.dtos.quotation import QuotationResult
from app.application.dtos.service_assignment import ServiceAssignmentResult
from app.application.interfaces.services import RenderedPdf
from app.application.services import ProductService, QuotationService, ServiceAssignmentService
from app.main import app

EMAIL_BODY = {
    "client_email": "buyer@acme.test",
    "subject": "Your quotation",
    "body": "Please see attached.",
}


def _override(dependency, value) -> None:
    app.dependency_overrides[dependency] = lambda: value


def _email_service(outcome: EmailOutcome) -> AsyncMock:
    svc = AsyncMock()
    svc.send.return_value = outcome
    _override(get_document_email_service, svc)
    return svc


async def test_routes_require_sign_in(client: AsyncClient) -> None:
    response = await client.get("/api/v1/quotations/q1")
    assert response.status_code == 401
    assert response.json()["error"] == "HTTP_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_missing_quotation_is_404(client: AsyncClient, signed_in) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = None
    _override(get_quotation_service, QuotationService(repo, AsyncMock(), MagicMock()))

    response = await client.get("/api/v1/quotations/q404")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "RESOURCE_NOT_FOUND"
    assert body["details"] == {"resource_type": "Quotation", "resource_id": "q404"}


async def test_signing_an_accepted_quotation_is_409(client: AsyncClient, signed_in) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = QuotationResult(
        id="q1",
        quotation_number="QT-20240301-0001",
        items=[],
        start_date=None,
        end_date=None,
        duration_days=0,
        total_amount=0,
        status="accepted",
        client_name="Acme",
        client_email="buyer@acme.test",
    )
    _override(get_quotation_service, QuotationService(repo, AsyncMock(), MagicMock()))

    response = await client.post("/api/v1/quotations/q1/sign")

    assert response.status_code == 409
    assert response.json()["error"] == "INVALID_STATE"
    repo.sign.assert_not_awaited()


def _assignment(company_id: str) -> ServiceAssignmentResult:
    return ServiceAssignmentResult(
        id="sa1",
        sa_number="SA-123456",
        project_site_id="p1",
        project_site_name="EDSA Northbound",
        project_site_location="Quezon City",
        service_type="Installation",
        assigned_to="crew-1",
        job_description="Install new tarp",
        status="Pending",
        company_id=company_id,
    )


async def test_cancel_without_sign_in_writes_nothing(client: AsyncClient) -> None:
    repo = AsyncMock()
    _override(get_service_assignment_service, ServiceAssignmentService(repo))

    response = await client.post("/api/v1/service-assignments/sa1/cancel")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["redirect_to"] is None
    repo.mark_cancelled.assert_not_awaited()


async def test_cancel_signed_in(client: AsyncClient, signed_in) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment("company-1")
    _override(get_service_assignment_service, ServiceAssignmentService(repo))

    response = await client.post("/api/v1/service-assignments/sa1/cancel")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["redirect_to"] == "/logistics/assignments"
    repo.mark_cancelled.assert_awaited_once_with("sa1", signed_in.uid)


async def test_cancel_write_failure_is_reported(client: AsyncClient, signed_in) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment("company-1")
    repo.mark_cancelled.side_effect = RuntimeError("permission denied")
    _override(get_service_assignment_service, ServiceAssignmentService(repo))

    response = await client.post("/api/v1/service-assignments/sa1/cancel")

    assert response.status_code == 200
    assert response.json()["success"] is False


async def test_send_email_success(client: AsyncClient, signed_in) -> None:
    svc = _email_service(
        EmailOutcome(success=True, message="Email sent successfully", email_id="em_1")
    )

    response = await client.post("/api/v1/quotations/q1/send-email", json=EMAIL_BODY)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Email sent successfully",
        "email_id": "em_1",
    }
    kind, document_id, request, user = svc.send.await_args.args
    assert (kind.value, document_id) == ("quotation", "q1")
    assert request.client_email == "buyer@acme.test"
    assert user.uid == signed_in.uid


async def test_send_email_provider_rejection_is_400(client: AsyncClient, signed_in) -> None:
    _email_service(
        EmailOutcome(
            success=False,
            message="Failed to send email",
            error="Domain not verified",
            provider_error=True,
        )
    )

    response = await client.post("/api/v1/cost-estimates/ce1/send-email", json=EMAIL_BODY)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Domain not verified"}


async def test_send_email_other_failure_is_500(client: AsyncClient, signed_in) -> None:
    _email_service(
        EmailOutcome(
            success=False,
            message="Failed to send email",
            error="Email service did not return confirmation",
        )
    )

    response = await client.post("/api/v1/cost-estimates/ce1/send-email", json=EMAIL_BODY)

    assert response.status_code == 500
    assert response.json()["success"] is False


async def test_send_email_body_is_validated(client: AsyncClient, signed_in) -> None:
    svc = _email_service(EmailOutcome(success=True, message="ok"))

    response = await client.post(
        "/api/v1/quotations/q1/send-email", json={"client_email": "buyer@acme.test"}
    )

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"
    svc.send.assert_not_awaited()


async def test_quotation_pdf_download(client: AsyncClient, signed_in) -> None:
    svc = AsyncMock()
    svc.quotation.return_value = RenderedPdf(
        filename="quotation-QT-20240301-0001.pdf", content=b"%PDF-1.4 fake"
    )
    _override(get_document_pdf_service, svc)

    response = await client.post("/api/v1/pdf/quotation", json={"quotation_id": "q1"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="quotation-QT-20240301-0001.pdf"'
    )
    assert response.content == b"%PDF-1.4 fake"
    svc.quotation.assert_awaited_once_with("q1", signed_in)


def _led_site(
    player_id: str | None, site_code: str = "", company_id: str = "company-1"
) -> ProductService:
    repo = AsyncMock()
    repo.get_by_id.return_value = ProductResult(
        id="p1",
        name="EDSA LED",
        company_id=company_id,
        price=100000,
        location="EDSA",
        site_code=site_code,
        type="RENTAL",
        description="",
        status="active",
        active=True,
        deleted=False,
        position=1,
        player_id=player_id,
    )
    return ProductService(repo, MagicMock())


async def test_brightness_goes_to_the_site_player(client: AsyncClient, signed_in) -> None:
    players = AsyncMock()
    players.set_brightness.return_value = {"code": 0}
    _override(get_product_service, _led_site("PLAYER-9"))
    _override(get_player_control, players)

    response = await client.post(
        "/api/v1/sites/p1/controls/brightness", json={"value": 70}
    )

    assert response.status_code == 200
    assert response.json() == {"player_id": "PLAYER-9", "result": {"code": 0}}
    players.set_brightness.assert_awaited_once_with(["PLAYER-9"], 70)


async def test_site_without_player_is_rejected(client: AsyncClient, signed_in) -> None:
    players = AsyncMock()
    _override(get_product_service, _led_site(None))
    _override(get_player_control, players)

    response = await client.post("/api/v1/sites/p1/controls/restart")

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "player_id"}
    players.restart.assert_not_awaited()


async def test_cancel_of_another_companys_assignment_writes_nothing(
    client: AsyncClient, signed_in
) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _assignment("OTHER")
    _override(get_service_assignment_service, ServiceAssignmentService(repo))

    response = await client.post("/api/v1/service-assignments/sa1/cancel")

    assert response.status_code == 200
    assert response.json()["success"] is False
    repo.mark_cancelled.assert_not_awaited()


async def test_another_companys_site_player_is_forbidden(client: AsyncClient, signed_in) -> None:
    players = AsyncMock()
    _override(get_product_service, _led_site("PLAYER-9", company_id="OTHER"))
    _override(get_player_control, players)

    response = await client.post(
        "/api/v1/sites/p1/controls/brightness", json={"value": 70}
    )

    assert response.status_code == 403
    assert response.json()["error"] == "AUTHORIZATION_ERROR"
    players.set_brightness.assert_not_awaited()


async def test_another_companys_quotation_is_forbidden(client: AsyncClient, signed_in) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = QuotationResult(
        id="q1",
        quotation_number="QT-20240301-0001",
        items=[],
        start_date=None,
        end_date=None,
        duration_days=0,
        total_amount=0,
        status="draft",
        client_name="Acme",
        client_email="buyer@acme.test",
        company_id="OTHER",
    )
    _override(get_quotation_service, QuotationService(repo, AsyncMock(), MagicMock()))

    response = await client.get("/api/v1/quotations/q1")

    assert response.status_code == 403
    assert response.json()["error"] == "AUTHORIZATION_ERROR"
