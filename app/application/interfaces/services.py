"""Gateway interfaces (ports) for outbound services.

Protocols define contracts for email, object storage and the LED player
CMS so that application services can be tested with fakes (DIP).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.common import CompanyResult
    from app.application.dtos.cost_estimate import CostEstimateResult
    from app.application.dtos.email import OutboundEmail, SendResult
    from app.application.dtos.quotation import QuotationResult
    from app.application.dtos.report import ReportResult
    from app.application.dtos.service_assignment import ServiceAssignmentResult


@dataclass(frozen=True)
class StoredObject:
    """Where an uploaded object landed."""

    path: str
    url: str
    size: int
    content_type: str


class IEmailSender(Protocol):
    """Protocol for transactional email providers."""

    async def send(self, email: OutboundEmail) -> SendResult:
        """Send one email. Provider errors are reported in the result, not raised."""


class IStorageService(Protocol):
    """Protocol for object storage backends (local filesystem, Firebase Storage)."""

    async def upload(self, data: bytes, path: str, content_type: str) -> StoredObject: ...

    async def download(self, path: str) -> bytes: ...

    async def delete(self, path: str) -> bool: ...

    async def exists(self, path: str) -> bool: ...


class IPlayerControl(Protocol):
    """Protocol for the LED player device-control API."""

    async def set_brightness(self, player_ids: list[str], value: int) -> dict[str, Any]: ...

    async def set_volume(self, player_ids: list[str], value: int) -> dict[str, Any]: ...

    async def restart(self, player_ids: list[str]) -> dict[str, Any]: ...

    async def screenshot(self, player_ids: list[str]) -> str | None: ...

    async def pause_content(self, player_ids: list[str]) -> dict[str, Any]: ...

    async def player_info(
        self, player_ids: list[str], player_sns: list[str] | None = None
    ) -> dict[str, Any]: ...

    async def configuration(
        self, player_ids: list[str], commands: list[str] | None = None
    ) -> dict[str, Any]: ...


class IEmailTemplateRenderer(Protocol):
    """Protocol for rendering the HTML layout of a document email."""

    def render(self, kind: str, context: dict[str, Any]) -> str: ...


@dataclass(frozen=True)
class RenderedPdf:
    """A generated PDF and the attachment filename it is served under."""

    filename: str
    content: bytes


class IPdfRenderer(Protocol):
    """Protocol for turning documents into PDFs."""

    def cost_estimate(
        self, estimate: CostEstimateResult, company: CompanyResult
    ) -> RenderedPdf: ...

    def quotation(self, quotation: QuotationResult, company: CompanyResult) -> RenderedPdf: ...

    def service_assignment(
        self, assignment: ServiceAssignmentResult, company: CompanyResult
    ) -> RenderedPdf: ...

    def report(self, report: ReportResult, company: CompanyResult) -> RenderedPdf: ...
