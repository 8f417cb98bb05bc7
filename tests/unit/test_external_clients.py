"""Resend sender, log-only sender and CMS player client over httpx.MockTransport."""

import json

import httpx
import pytest

from app.application.dtos.email import (
    NO_CONFIRMATION_ERROR,
    EmailAttachment,
    OutboundEmail,
)
from app.domain.exceptions import ExternalServiceException, ValidationException
from app.infrastructure.external.cms import PlayerControlClient
from app.infrastructure.external.email import LogOnlyEmailSender, ResendEmailSender

EMAIL = OutboundEmail(
    from_address="sales@ohplus.test",
    to=["buyer@acme.test"],
    subject="Quotation QT-20240301-1234",
    html="<p>Hi</p>",
    cc=["boss@acme.test"],
    attachments=[EmailAttachment("q.pdf", "JVBERi0=", "application/pdf")],
    reply_to="sales@ohplus.test",
)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_resend_sends_payload_and_returns_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "re_123"})

    async with _client(handler) as http:
        result = await ResendEmailSender("key-1", http, "https://resend.test/").send(EMAIL)

    assert result.success is True
    assert result.email_id == "re_123"
    request = seen[0]
    assert str(request.url) == "https://resend.test/emails"
    assert request.headers["Authorization"] == "Bearer key-1"
    body = json.loads(request.content)
    assert body["to"] == ["buyer@acme.test"]
    assert body["cc"] == ["boss@acme.test"]
    assert body["reply_to"] == "sales@ohplus.test"
    assert body["attachments"][0] == {
        "filename": "q.pdf",
        "content": "JVBERi0=",
        "content_type": "application/pdf",
    }


async def test_resend_error_message_is_passed_through() -> None:
    async with _client(
        lambda r: httpx.Response(422, json={"message": "Invalid `to` field"})
    ) as http:
        result = await ResendEmailSender("key", http).send(EMAIL)

    assert result.success is False
    assert result.error == "Invalid `to` field"
    assert result.provider_rejected is True


async def test_resend_without_id_reports_missing_confirmation() -> None:
    async with _client(lambda r: httpx.Response(200, json={})) as http:
        result = await ResendEmailSender("key", http).send(EMAIL)

    assert result.success is False
    assert result.error == NO_CONFIRMATION_ERROR
    assert result.provider_rejected is False


async def test_resend_transport_failure_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as http:
        result = await ResendEmailSender("key", http).send(EMAIL)

    assert result.success is False
    assert "unreachable" in result.error
    assert result.provider_rejected is False


async def test_log_only_sender_reports_success() -> None:
    result = await LogOnlyEmailSender().send(EMAIL)
    assert result.success is True
    assert result.email_id.startswith("local-")


async def test_player_brightness_posts_to_cms() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as http:
        cms = PlayerControlClient("https://cms.test/api/", http, notice_url="https://hook.test")
        result = await cms.set_brightness(["P-1"], 40)

    assert result == {"ok": True}
    assert str(seen[0].url) == "https://cms.test/api/players/realtime-control/brightness"
    assert json.loads(seen[0].content) == {
        "playerIds": ["P-1"],
        "value": 40,
        "noticeUrl": "https://hook.test",
    }


async def test_player_screenshot_returns_url() -> None:
    async with _client(
        lambda r: httpx.Response(200, json={"screenshotUrl": "https://cdn.test/s.png"})
    ) as http:
        url = await PlayerControlClient("https://cms.test", http).screenshot(["P-1"])
    assert url == "https://cdn.test/s.png"


async def test_player_configuration_uses_default_commands() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    async with _client(handler) as http:
        await PlayerControlClient("https://cms.test", http).configuration(["P-1"])
    assert json.loads(seen[0].content)["commands"] == [
        "volumeValue",
        "brightnessValue",
        "videoSourceValue",
        "timeValue",
    ]


@pytest.mark.parametrize("value", [-1, 101, True])
async def test_player_rejects_out_of_range_levels(value) -> None:
    async with _client(lambda r: httpx.Response(200, json={})) as http:
        with pytest.raises(ValidationException):
            await PlayerControlClient("https://cms.test", http).set_volume(["P-1"], value)


async def test_player_requires_an_id() -> None:
    async with _client(lambda r: httpx.Response(200, json={})) as http:
        with pytest.raises(ValidationException):
            await PlayerControlClient("https://cms.test", http).restart([" "])


async def test_player_upstream_error_raises() -> None:
    async with _client(lambda r: httpx.Response(503, text="maintenance")) as http:
        with pytest.raises(ExternalServiceException) as exc_info:
            await PlayerControlClient("https://cms.test", http).restart(["P-1"])
    assert exc_info.value.details["status_code"] == 503
