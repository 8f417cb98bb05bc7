"""Outbound email: Resend sender, log-only sender and HTML layouts."""

from app.infrastructure.external.email.factory import create_email_sender
from app.infrastructure.external.email.log_only_sender import LogOnlyEmailSender
from app.infrastructure.external.email.resend_sender import ResendEmailSender
from app.infrastructure.external.email.template_renderer import EmailTemplateRenderer

__all__ = [
    "EmailTemplateRenderer",
    "LogOnlyEmailSender",
    "ResendEmailSender",
    "create_email_sender",
]
