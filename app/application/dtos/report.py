"""DTOs for logistics reports."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ReportAttachment:
    """An uploaded photo or file attached to a report."""

    note: str
    file_name: str
    file_type: str
    file_url: str


@dataclass(frozen=True)
class ReportResult:
    """Report read-model."""

    id: str
    site_id: str
    site_name: str
    company_id: str
    report_type: str
    status: str
    attachments: list[ReportAttachment]
    completion_percentage: int
    tags: list[str]
    created_by: str
    created_by_name: str = ""
    client: str = ""
    client_id: str = ""
    seller_id: str = ""
    booking_start: str = ""
    booking_end: str = ""
    jo_number: str | None = None
    service_assignment_id: str | None = None
    category: str = ""
    subcategory: str = ""
    priority: str = ""
    date: str = ""
    site_code: str | None = None
    location: str | None = None
    assigned_to: str | None = None
    installation_status: str | None = None
    installation_timeline: str | None = None
    delay_reason: str | None = None
    delay_days: str | None = None
    description_of_work: str | None = None
    product: dict[str, Any] | None = None
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class ReportCreate:
    """Input for creating a report from a service assignment."""

    report_type: str
    date: str
    attachments: list[dict[str, Any]] = field(default_factory=list)
    completion_percentage: int = 0
    status: str | None = None
    tags: list[str] | None = None
    category: str = "logistics"
    subcategory: str = ""
    priority: str = "medium"
    booking_start: str = ""
    booking_end: str = ""
    site_code: str | None = None
    location: str | None = None
    assigned_to: str | None = None
    installation_status: str | None = None
    installation_timeline: str | None = None
    delay_reason: str | None = None
    delay_days: str | None = None
    description_of_work: str | None = None
