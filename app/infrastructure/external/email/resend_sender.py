"""Resend email sender (POST /emails over httpx)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.dtos.email import NO_CONFIRMATION_ERROR, OutboundEmail, SendResult

logger = logging.getLogger(__name__)


def build_payload(email: OutboundEmail) -> dict[str, Any]:
    """Resend request body for an outbound email."""
    payload: dict[str, Any] = {
        "from": email.from_address,
        "to": email.to,
        "subject": email.subject,
        "html": email.html,
    }
    if email.cc:
        payload["cc"] = email.cc
    if email.reply_to:
        payload["reply_to"] = email.reply_to
    if email.attachments:
        payload["attachments"] = [
            {"filename": a.filename, "content": a.content, "content_type": a.type}
            for a in email.attachments
        ]
    return payload


class ResendEmailSender:
    """IEmailSender backed by the Resend HTTP API.

    Provider and transport failures come back as ``SendResult(success=False)``
    so the caller can record the attempt and report the provider's message.
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        api_url: str = "https://api.resend.com",
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._url = f"{api_url.rstrip('/')}/emails"

    async def send(self, email: OutboundEmail) -> SendResult:
        try:
            resp = await self._http.post(
                self._url,
                json=build_payload(email),
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Resend request failed: %s", e)
            return SendResult(success=False, error=f"Email provider unreachable: {e}")

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code >= 400:
            message = body.get("message") or body.get("error") or f"HTTP {resp.status_code}"
            logger.warning("Resend rejected email (%s): %s", resp.status_code, message)
            return SendResult(success=False, error=str(message), provider_rejected=True)

        email_id = body.get("id")
        if not email_id:
            return SendResult(success=False, error=NO_CONFIRMATION_ERROR)
        return SendResult(success=True, email_id=str(email_id))
