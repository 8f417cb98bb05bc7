"""Cost estimate API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CostEstimateStatusLiteral = Literal["draft", "sent", "viewed", "approved", "rejected"]
CostCategoryLiteral = Literal[
    "media_cost", "production_cost", "installation_cost", "maintenance_cost", "other"
]


class SiteForEstimateRequest(BaseModel):
    """A site offered in the estimate; becomes one media line."""

    product_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(default="", max_length=500)
    price: float = Field(..., ge=0)


class CostEstimateCreateRequest(BaseModel):
    """Request body for creating a cost estimate from selected sites."""

    sites: list[SiteForEstimateRequest] = Field(..., min_length=1)
    title: str = Field(default="", max_length=255)
    client_name: str = Field(default="", max_length=255)
    client_email: str = Field(default="", max_length=320)
    client_company: str = Field(default="", max_length=255)
    client_id: str | None = None
    proposal_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    notes: str = Field(default="", max_length=5000)
    send_email: bool = Field(default=False, description="Create directly in status 'sent'")


class LineItemRequest(BaseModel):
    """One priced line of an estimate."""

    id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, max_length=500)
    quantity: int = Field(default=1, ge=0)
    unit_price: float = Field(default=0, ge=0)
    total_price: float = Field(default=0, ge=0)
    category: CostCategoryLiteral = "other"
    notes: str = Field(default="", max_length=2000)


class LineItemsUpdate(BaseModel):
    """Replacement line items; totals are recomputed."""

    line_items: list[LineItemRequest]


class CostEstimateStatusUpdate(BaseModel):
    """Request body for approving, rejecting or otherwise moving an estimate."""

    status: CostEstimateStatusLiteral
    rejection_reason: str | None = Field(default=None, max_length=2000)


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    quantity: int
    unit_price: float
    total_price: float
    category: str
    notes: str = ""


class CostEstimateResponse(BaseModel):
    """Cost estimate with line items and totals."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    line_items: list[LineItemResponse]
    subtotal: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    status: str
    password: str
    client_name: str = ""
    client_email: str = ""
    client_company: str = ""
    client_id: str | None = None
    proposal_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    notes: str = ""
    created_by: str | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
