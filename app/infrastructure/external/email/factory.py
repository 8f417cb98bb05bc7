"""Email sender factory: Resend when an API key is configured, log-only otherwise."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from app.application.interfaces.services import IEmailSender
from app.infrastructure.external.email.log_only_sender import LogOnlyEmailSender
from app.infrastructure.external.email.resend_sender import ResendEmailSender

if TYPE_CHECKING:
    from app.core.config import Settings


def create_email_sender(settings: "Settings", http_client: httpx.AsyncClient) -> IEmailSender:
    if settings.resend_api_key is None or not settings.resend_api_key.get_secret_value():
        return LogOnlyEmailSender()
    return ResendEmailSender(
        api_key=settings.resend_api_key.get_secret_value(),
        http_client=http_client,
        api_url=settings.resend_api_url,
    )
