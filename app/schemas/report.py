"""Logistics report API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ReportAttachmentModel(BaseModel):
    """Attachment as sent by the upload form; entries without a URL and name are dropped."""

    note: str = ""
    file_name: str = Field(default="", alias="fileName")
    file_type: str = Field(default="", alias="fileType")
    file_url: str = Field(default="", alias="fileUrl")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class ReportCreateRequest(BaseModel):
    """Request body for creating a report against a service assignment."""

    report_type: str = Field(..., min_length=1, max_length=64)
    date: str = Field(..., min_length=1, description="Report date as entered (ISO date)")
    attachments: list[ReportAttachmentModel] = Field(default_factory=list)
    completion_percentage: int = Field(default=0, ge=0, le=100)
    status: Literal["draft", "posted"] | None = None
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

    def attachment_dicts(self) -> list[dict[str, Any]]:
        return [a.model_dump(by_alias=True) for a in self.attachments]


# snake_case request field -> stored report field
_UPDATE_FIELDS = {
    "status": "status",
    "completion_percentage": "completionPercentage",
    "attachments": "attachments",
    "tags": "tags",
    "installation_status": "installationStatus",
    "installation_timeline": "installationTimeline",
    "delay_reason": "delayReason",
    "delay_days": "delayDays",
    "description_of_work": "descriptionOfWork",
}


class ReportUpdate(BaseModel):
    """Request body for updating a report (partial)."""

    status: Literal["draft", "posted"] | None = None
    completion_percentage: int | None = Field(default=None, ge=0, le=100)
    attachments: list[ReportAttachmentModel] | None = None
    tags: list[str] | None = None
    installation_status: str | None = None
    installation_timeline: str | None = None
    delay_reason: str | None = None
    delay_days: str | None = None
    description_of_work: str | None = None

    def to_fields(self) -> dict[str, Any]:
        """Fields that were set, keyed by their stored names."""
        data = self.model_dump(exclude_unset=True, by_alias=True)
        return {_UPDATE_FIELDS[k]: v for k, v in data.items() if k in _UPDATE_FIELDS}


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    site_id: str
    site_name: str
    company_id: str
    report_type: str
    status: str
    attachments: list[ReportAttachmentModel]
    completion_percentage: int
    tags: list[str]
    created_by: str
    created_by_name: str = ""
    client: str = ""
    jo_number: str | None = None
    service_assignment_id: str | None = None
    category: str = ""
    subcategory: str = ""
    priority: str = ""
    date: str = ""
    site_code: str | None = None
    location: str | None = None
    installation_status: str | None = None
    delay_reason: str | None = None
    description_of_work: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
