"""DocumentEmailService: validation, records, status update and provider failures."""

import base64
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from app.api.v1.responses import email_outcome_response
from app.application.dtos.common import CurrentUser
from app.application.dtos.cost_estimate import CostEstimateResult
from app.application.dtos.email import (
    NO_CONFIRMATION_ERROR,
    DocumentEmailRequest,
    EmailAttachment,
    SendResult,
)
from app.application.interfaces.services import StoredObject
from app.application.services import DocumentEmailService
from app.domain.enums import EmailDocumentKind
from app.domain.exceptions import ValidationException
from app.infrastructure.external.email import ResendEmailSender

USER = CurrentUser(uid="u1", email="sales@ohplus.test", display_name="Sam", company_id="c1")
PDF = EmailAttachment("CE-1.pdf", base64.b64encode(b"%PDF-1.4 test").decode(), "application/pdf")


def _estimate() -> CostEstimateResult:
    return CostEstimateResult(
        id="ce1",
        title="Cost Estimate for Acme",
        line_items=[],
        subtotal=100,
        tax_rate=0.12,
        tax_amount=12,
        total_amount=112,
        status="draft",
        password="ABCD1234",
        client_name="Acme",
    )


def _service(send_result: SendResult | None = None, sender=None):
    if sender is None:
        sender = AsyncMock()
        sender.send.return_value = send_result
    storage = AsyncMock()
    storage.upload.return_value = StoredObject(
        path="emails/CE/ce1/CE-1.pdf", url="https://files.test/CE-1.pdf", size=13,
        content_type="application/pdf",
    )
    records = AsyncMock()
    quotations = AsyncMock()
    estimates = AsyncMock()
    estimates.get_by_id.return_value = _estimate()
    renderer = MagicMock()
    renderer.render.return_value = "<html>ok</html>"
    svc = DocumentEmailService(
        sender,
        storage,
        records,
        quotations,
        estimates,
        renderer,
        default_from="noreply@ohplus.test",
        app_url="https://app.ohplus.test/",
        company_name="OH Plus",
    )
    return svc, sender, storage, records, estimates, renderer


def _request(**overrides) -> DocumentEmailRequest:
    values = {
        "client_email": "buyer@acme.test",
        "subject": "Your cost estimate",
        "body": "Hello\n<script>alert(1)</script>Please review.",
        "cc_email": "boss@acme.test, ",
        "pre_generated_pdfs": [PDF],
    }
    values.update(overrides)
    return DocumentEmailRequest(**values)


async def test_successful_send_records_attempt_and_marks_sent() -> None:
    svc, sender, storage, records, estimates, renderer = _service(
        SendResult(success=True, email_id="em_1")
    )

    outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.success is True
    assert outcome.email_id == "em_1"
    email = sender.send.await_args.args[0]
    assert email.to == ["buyer@acme.test"]
    assert email.cc == ["boss@acme.test"]
    assert email.from_address == "sales@ohplus.test"
    assert email.attachments[0].filename == "CE-1.pdf"

    context = renderer.render.call_args.args[1]
    assert renderer.render.call_args.args[0] == "CE"
    assert context["link"] == "https://app.ohplus.test/cost-estimates/view/ce1"
    assert context["password"] == "ABCD1234"
    assert "<script>" not in context["body_html"]

    record, = records.record.await_args.args
    assert records.record.await_args.kwargs == {"sent": True}
    assert record["costEstimateId"] == "ce1"
    assert record["email_type"] == "CE"
    assert record["attachments"][0]["fileUrl"] == "https://files.test/CE-1.pdf"
    estimates.update.assert_awaited_once_with("ce1", {"status": "sent"})


async def test_provider_rejection_is_a_provider_error() -> None:
    svc, _, _, records, estimates, _ = _service(
        SendResult(success=False, error="Domain not verified", provider_rejected=True)
    )

    outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.success is False
    assert outcome.error == "Domain not verified"
    assert outcome.provider_error is True
    assert records.record.await_args.kwargs == {"sent": False}
    estimates.update.assert_not_awaited()


async def test_missing_confirmation_is_not_a_provider_error() -> None:
    svc, *_ = _service(SendResult(success=False, error=NO_CONFIRMATION_ERROR))

    outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.success is False
    assert outcome.provider_error is False


async def test_unreachable_provider_maps_to_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        svc, _, _, records, estimates, _ = _service(sender=ResendEmailSender("key", http))
        outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.success is False
    assert outcome.provider_error is False
    assert email_outcome_response(outcome).status_code == 500
    assert records.record.await_args.kwargs == {"sent": False}
    estimates.update.assert_not_awaited()


async def test_rejected_email_maps_to_bad_request() -> None:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(
            lambda r: httpx.Response(403, json={"message": "Domain not verified"})
        )
    ) as http:
        svc, *_ = _service(sender=ResendEmailSender("key", http))
        outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.provider_error is True
    assert email_outcome_response(outcome).status_code == 400


async def test_archive_failure_does_not_block_send() -> None:
    svc, sender, storage, records, _, _ = _service(SendResult(success=True, email_id="em_2"))
    storage.upload.side_effect = RuntimeError("bucket down")

    outcome = await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(), USER)

    assert outcome.success is True
    record, = records.record.await_args.args
    assert record["attachments"][0]["fileUrl"] == ""
    sender.send.assert_awaited_once()


@pytest.mark.parametrize(
    "overrides",
    [
        {"client_email": ""},
        {"client_email": "not-an-address"},
        {"cc_email": "ok@acme.test, broken"},
        {"subject": "  "},
        {"body": ""},
    ],
)
async def test_invalid_request_is_rejected_before_sending(overrides) -> None:
    svc, sender, _, records, _, _ = _service(SendResult(success=True, email_id="x"))

    with pytest.raises(ValidationException):
        await svc.send(EmailDocumentKind.COST_ESTIMATE, "ce1", _request(**overrides), USER)
    sender.send.assert_not_awaited()
    records.record.assert_not_awaited()


async def test_attachment_that_is_not_base64_is_rejected() -> None:
    svc, sender, *_ = _service(SendResult(success=True, email_id="x"))
    bad = EmailAttachment("broken.pdf", "%%%not base64%%%", "application/pdf")

    with pytest.raises(ValidationException):
        await svc.send(
            EmailDocumentKind.COST_ESTIMATE, "ce1", _request(pre_generated_pdfs=[bad]), USER
        )
    sender.send.assert_not_awaited()
