"""Job order API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class JobOrderCreateRequest(BaseModel):
    """Request body for creating a job order from an accepted quotation."""

    quotation_id: str = Field(..., min_length=1)
    product_id: str | None = Field(default=None, description="Site to use when the quotation has several")
    notes: str = Field(default="", max_length=5000)


class JobOrderStatusUpdate(BaseModel):
    status: Literal["pending", "in_progress", "completed", "cancelled"]


class JobOrderAssignRequest(BaseModel):
    """Request body for assigning a job order to a crew member."""

    assignee_id: str = Field(..., min_length=1)
    assignee_name: str = Field(default="", max_length=255)


class JobOrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_order_number: str
    quotation_id: str
    quotation_number: str
    client_name: str
    client_email: str
    client_company: str = ""
    product_name: str
    product_location: str
    site_code: str = ""
    status: str
    start_date: datetime | None
    end_date: datetime | None
    duration_days: int
    total_amount: float
    created_by: str
    created_by_name: str = ""
    assigned_to: str | None = None
    assigned_to_name: str | None = None
    notes: str = ""
    created: datetime | None = None
    updated: datetime | None = None
