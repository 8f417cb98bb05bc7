"""Email sender that logs instead of sending (no provider configured)."""

from __future__ import annotations

import logging

from app.application.dtos.email import OutboundEmail, SendResult
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class LogOnlyEmailSender:
    """IEmailSender implementation that logs instead of sending email.

    Use when RESEND_API_KEY is not configured. Reports success with a local
    ID so the rest of the flow (records, status) behaves as in production.
    """

    async def send(self, email: OutboundEmail) -> SendResult:
        email_id = f"local-{generate_cuid()}"
        logger.info(
            "Email not sent (no provider): to=%d cc=%d attachments=%d subject=%r",
            len(email.to),
            len(email.cc),
            len(email.attachments),
            email.subject[:80],
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Email recipients: %s cc: %s", email.to, email.cc)
            logger.debug("Email body (first 500 chars): %s", email.html[:500])
        return SendResult(success=True, email_id=email_id)
