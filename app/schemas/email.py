"""Document email API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.email import DocumentEmailRequest, EmailAttachment


class AttachmentModel(BaseModel):
    """A file sent inline with the email; content is base64."""

    filename: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: str | None = Field(default=None, description="MIME type; defaults by attachment kind")


class SendEmailRequest(BaseModel):
    """Request body for emailing a quotation or cost estimate to the client."""

    client_email: str = Field(..., description="Recipient (the client)")
    subject: str = Field(..., min_length=1, max_length=500)
    body: str = Field(..., min_length=1, max_length=50_000, description="Plain text; newlines kept")
    cc_email: str | None = Field(default=None, description="Comma-separated CC addresses")
    client_name: str = ""
    pre_generated_pdfs: list[AttachmentModel] = Field(default_factory=list)
    uploaded_files: list[AttachmentModel] = Field(default_factory=list)


class SendEmailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str
    email_id: str | None = None


class SendEmailErrorResponse(BaseModel):
    """Returned with 400 when the provider rejects the email."""

    success: bool = False
    error: str


def to_document_request(body: SendEmailRequest) -> DocumentEmailRequest:
    """Send-dialog body as the service input; a missing type keeps the per-kind default."""

    def attachments(models: list[AttachmentModel]) -> list[EmailAttachment]:
        return [EmailAttachment(m.filename, m.content, m.type or "") for m in models]

    return DocumentEmailRequest(
        client_email=body.client_email,
        subject=body.subject,
        body=body.body,
        cc_email=body.cc_email,
        pre_generated_pdfs=attachments(body.pre_generated_pdfs),
        uploaded_files=attachments(body.uploaded_files),
        client_name=body.client_name,
    )
