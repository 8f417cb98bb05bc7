"""DTOs for outbound document emails."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EmailAttachment:
    """A file attached to an email; content is base64."""

    filename: str
    content: str
    type: str = "application/octet-stream"


@dataclass(frozen=True)
class OutboundEmail:
    """Provider-agnostic email to send."""

    from_address: str
    to: list[str]
    subject: str
    html: str
    cc: list[str] = field(default_factory=list)
    attachments: list[EmailAttachment] = field(default_factory=list)
    reply_to: str | None = None


@dataclass(frozen=True)
class SendResult:
    """Outcome reported by the email provider."""

    success: bool
    email_id: str | None = None
    error: str | None = None
    provider_rejected: bool = False


@dataclass(frozen=True)
class DocumentEmailRequest:
    """What the user typed in the send dialog for a quotation or cost estimate."""

    client_email: str
    subject: str
    body: str
    cc_email: str | None = None
    pre_generated_pdfs: list[EmailAttachment] = field(default_factory=list)
    uploaded_files: list[EmailAttachment] = field(default_factory=list)
    client_name: str = ""


@dataclass(frozen=True)
class EmailOutcome:
    """Result returned to the caller of a document email send."""

    success: bool
    message: str
    email_id: str | None = None
    error: str | None = None
    provider_error: bool = False


NO_CONFIRMATION_ERROR = "Email service did not return confirmation"
