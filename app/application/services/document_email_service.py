"""Send quotations and cost estimates to clients by email.

The body typed by the user is sanitized and wrapped in the layout for the
document kind. Attachments (the pre-generated PDF and any uploaded files) are
sent inline as base64 and also archived to storage. Every attempt is logged
to the ``emails`` collection, and a successful send marks the document sent.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from app.application.dtos.common import CurrentUser
from app.application.dtos.email import (
    DocumentEmailRequest,
    EmailAttachment,
    EmailOutcome,
    OutboundEmail,
)
from app.application.interfaces.repositories import (
    ICostEstimateRepository,
    IEmailRecordRepository,
    IQuotationRepository,
)
from app.application.interfaces.services import (
    IEmailSender,
    IEmailTemplateRenderer,
    IStorageService,
)
from app.application.services.access import ensure_company_access
from app.domain.enums import CostEstimateStatus, EmailDocumentKind, QuotationStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.formatting import format_currency
from app.shared.utils.sanitization import EmailBodySanitizer, split_addresses

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Email sent successfully"


def _decode(attachment: EmailAttachment) -> bytes:
    try:
        return base64.b64decode(attachment.content, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationException(
            f"Attachment {attachment.filename} is not valid base64", field="attachments"
        ) from None


class DocumentEmailService:
    def __init__(
        self,
        sender: IEmailSender,
        storage: IStorageService,
        email_records: IEmailRecordRepository,
        quotation_repo: IQuotationRepository,
        cost_estimate_repo: ICostEstimateRepository,
        renderer: IEmailTemplateRenderer,
        *,
        default_from: str,
        app_url: str,
        company_name: str,
    ) -> None:
        self._sender = sender
        self._storage = storage
        self._records = email_records
        self._quotations = quotation_repo
        self._cost_estimates = cost_estimate_repo
        self._renderer = renderer
        self._default_from = default_from
        self._app_url = app_url.rstrip("/")
        self._company_name = company_name

    @staticmethod
    def validate_recipients(request: DocumentEmailRequest) -> list[str]:
        """Check the To and CC addresses; return the CC list.

        Raises:
            ValidationException: For a missing or malformed address, subject or body.
        """
        if not request.client_email:
            raise ValidationException("Client email address is required", field="client_email")
        if not EmailBodySanitizer.is_valid_email(request.client_email):
            raise ValidationException("Invalid client email address", field="client_email")
        cc = split_addresses(request.cc_email)
        for address in cc:
            if not EmailBodySanitizer.is_valid_email(address):
                raise ValidationException(f"Invalid CC email address: {address}", field="cc_email")
        if not request.subject.strip():
            raise ValidationException("Subject is required", field="subject")
        if not request.body.strip():
            raise ValidationException("Body is required", field="body")
        return cc

    async def _document_context(
        self, kind: EmailDocumentKind, document_id: str, user: CurrentUser
    ) -> dict[str, Any]:
        if kind == EmailDocumentKind.QUOTATION:
            quotation = await self._quotations.get_by_id(document_id)
            if quotation is None:
                raise ResourceNotFoundException("Quotation", document_id)
            ensure_company_access("quotation", document_id, quotation.company_id, user, "send")
            return {
                "document_number": quotation.quotation_number,
                "client_name": quotation.client_name,
                "total": format_currency(quotation.total_amount),
                "link": None,
            }
        if kind == EmailDocumentKind.COST_ESTIMATE:
            estimate = await self._cost_estimates.get_by_id(document_id)
            if estimate is None:
                raise ResourceNotFoundException("CostEstimate", document_id)
            ensure_company_access(
                "cost_estimate", document_id, estimate.company_id, user, "send"
            )
            return {
                "document_number": estimate.title or estimate.id,
                "client_name": estimate.client_name,
                "total": format_currency(estimate.total_amount),
                "link": f"{self._app_url}/cost-estimates/view/{estimate.id}",
                "password": estimate.password,
            }
        raise ValidationException(f"Unsupported document kind: {kind.value}", field="kind")

    async def _archive(
        self, kind: EmailDocumentKind, document_id: str, attachment: EmailAttachment
    ) -> dict[str, Any]:
        data = _decode(attachment)
        record = {
            "fileName": attachment.filename,
            "fileSize": len(data),
            "fileType": attachment.type,
            "fileUrl": "",
        }
        path = f"emails/{kind.value}/{document_id}/{attachment.filename}"
        try:
            stored = await self._storage.upload(data, path, attachment.type)
        except Exception:
            logger.exception("Archiving attachment %s failed; sending without archive", path)
            return record
        record["fileUrl"] = stored.url
        return record

    async def send(
        self,
        kind: EmailDocumentKind,
        document_id: str,
        request: DocumentEmailRequest,
        user: CurrentUser,
    ) -> EmailOutcome:
        cc = self.validate_recipients(request)
        context = await self._document_context(kind, document_id, user)

        attachments = [
            EmailAttachment(a.filename, a.content, a.type or "application/pdf")
            for a in request.pre_generated_pdfs
        ] + [
            EmailAttachment(a.filename, a.content, a.type or "application/octet-stream")
            for a in request.uploaded_files
        ]
        archived = [await self._archive(kind, document_id, a) for a in attachments]

        html = self._renderer.render(
            kind.value,
            {
                **context,
                "body_html": EmailBodySanitizer.to_html(request.body),
                "company_name": self._company_name,
                "sender_name": user.display_name,
            },
        )
        from_address = user.email or self._default_from
        email = OutboundEmail(
            from_address=from_address,
            to=[request.client_email],
            cc=cc,
            subject=request.subject,
            html=html,
            attachments=attachments,
            reply_to=user.email,
        )
        result = await self._sender.send(email)

        id_field = "quotationId" if kind == EmailDocumentKind.QUOTATION else "costEstimateId"
        await self._records.record(
            {
                "from": from_address,
                "to": [request.client_email],
                "cc": cc,
                "subject": request.subject,
                "body": request.body,
                "email_type": kind.value,
                "userId": user.uid,
                id_field: document_id,
                "attachments": archived,
                "emailId": result.email_id,
                "error": result.error,
            },
            sent=result.success,
        )

        if not result.success:
            logger.warning("Email for %s %s failed: %s", kind.value, document_id, result.error)
            return EmailOutcome(
                success=False,
                message="Failed to send email",
                error=result.error,
                provider_error=result.provider_rejected,
            )

        if kind == EmailDocumentKind.QUOTATION:
            await self._quotations.update(document_id, {"status": QuotationStatus.SENT.value})
        else:
            await self._cost_estimates.update(
                document_id, {"status": CostEstimateStatus.SENT.value}
            )
        logger.info("Email %s sent for %s %s", result.email_id, kind.value, document_id)
        return EmailOutcome(success=True, message=SUCCESS_MESSAGE, email_id=result.email_id)
