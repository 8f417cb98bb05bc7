"""Service assignment (SA) API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class RequestedByModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    department: str = ""


class ServiceAssignmentCreateRequest(BaseModel):
    """Request body for creating a service assignment."""

    project_site_id: str = Field(..., min_length=1)
    project_site_name: str = Field(default="", max_length=255)
    project_site_location: str = Field(default="", max_length=500)
    service_type: str = Field(..., min_length=1, max_length=64)
    assigned_to: str = Field(..., min_length=1)
    job_description: str = Field(default="", max_length=5000)
    requested_by: RequestedByModel
    message: str = Field(default="", max_length=5000)
    covered_date_start: datetime | None = None
    covered_date_end: datetime | None = None
    alarm_date: datetime | None = None
    alarm_time: str = Field(default="", max_length=16)
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    service_expenses: list[dict[str, Any]] = Field(default_factory=list)
    job_order_id: str | None = None


class ServiceAssignmentStatusUpdate(BaseModel):
    status: Literal["Pending", "Ongoing", "Completed"]


class ServiceAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sa_number: str
    project_site_id: str
    project_site_name: str
    project_site_location: str
    service_type: str
    assigned_to: str
    job_description: str
    status: str
    requested_by: RequestedByModel | None = None
    message: str = ""
    covered_date_start: datetime | None = None
    covered_date_end: datetime | None = None
    alarm_date: datetime | None = None
    alarm_time: str = ""
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    service_expenses: list[dict[str, Any]] = Field(default_factory=list)
    job_order_id: str | None = None
    cancellation_date: datetime | None = None
    cancelled_by_uid: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
