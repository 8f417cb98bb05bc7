"""DTOs for service assignments (SA)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RequestedBy:
    """Who asked for the service."""

    id: str
    name: str
    department: str = ""


@dataclass(frozen=True)
class ServiceAssignmentResult:
    """Service assignment read-model."""

    id: str
    sa_number: str
    project_site_id: str
    project_site_name: str
    project_site_location: str
    service_type: str
    assigned_to: str
    job_description: str
    status: str
    requested_by: RequestedBy | None = None
    message: str = ""
    covered_date_start: datetime | None = None
    covered_date_end: datetime | None = None
    alarm_date: datetime | None = None
    alarm_time: str = ""
    attachments: list[dict[str, Any]] = field(default_factory=list)
    service_expenses: list[dict[str, Any]] = field(default_factory=list)
    job_order_id: str | None = None
    company_id: str | None = None
    cancellation_date: datetime | None = None
    cancelled_by_uid: str | None = None
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class ServiceAssignmentCreate:
    """Input for creating a service assignment."""

    project_site_id: str
    project_site_name: str
    project_site_location: str
    service_type: str
    assigned_to: str
    job_description: str
    requested_by: RequestedBy
    message: str = ""
    covered_date_start: datetime | None = None
    covered_date_end: datetime | None = None
    alarm_date: datetime | None = None
    alarm_time: str = ""
    attachments: list[dict[str, Any]] = field(default_factory=list)
    service_expenses: list[dict[str, Any]] = field(default_factory=list)
    job_order_id: str | None = None


@dataclass(frozen=True)
class CancelOutcome:
    """Result of a cancel request, shaped for the toast + redirect the UI performs."""

    success: bool
    message: str
    redirect_to: str | None = None
