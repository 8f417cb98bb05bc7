"""Quotation API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

QuotationStatusLiteral = Literal["draft", "sent", "accepted", "rejected", "expired", "viewed"]


class QuotationItemRequest(BaseModel):
    """A site to quote; price is the monthly rate."""

    product_id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=255)
    location: str = Field(default="", max_length=500)
    price: float = Field(default=0, ge=0)
    site_code: str = Field(default="", max_length=64)
    type: str = Field(default="", max_length=32)
    description: str = Field(default="", max_length=5000)
    media_url: str | None = None


class QuotationCreateRequest(BaseModel):
    """Request body for creating a quotation."""

    client_name: str = Field(..., min_length=1, max_length=255)
    client_email: str = Field(default="", max_length=320)
    client_id: str | None = None
    client_company: str = Field(default="", max_length=255)
    start_date: datetime
    end_date: datetime
    items: list[QuotationItemRequest] = Field(..., min_length=1)
    campaign_id: str | None = None
    proposal_id: str | None = None
    notes: str = Field(default="", max_length=5000)

    @model_validator(mode="after")
    def check_period(self) -> "QuotationCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class QuotationUpdate(BaseModel):
    """Request body for updating a quotation (partial). Changing dates or items re-prices it."""

    client_name: str | None = Field(default=None, min_length=1, max_length=255)
    client_email: str | None = Field(default=None, max_length=320)
    client_company: str | None = Field(default=None, max_length=255)
    start_date: datetime | None = None
    end_date: datetime | None = None
    items: list[QuotationItemRequest] | None = Field(default=None, min_length=1)
    notes: str | None = Field(default=None, max_length=5000)


class QuotationStatusUpdate(BaseModel):
    """Request body for moving a quotation to another status."""

    status: QuotationStatusLiteral


class QuotationItemResponse(BaseModel):
    """Priced quotation line."""

    model_config = ConfigDict(from_attributes=True)

    product_id: str
    name: str
    location: str
    price: float
    site_code: str = ""
    type: str = ""
    description: str = ""
    media_url: str | None = None
    duration_days: int = 0
    item_total_amount: float = 0.0


class QuotationResponse(BaseModel):
    """Quotation with priced items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    quotation_number: str
    items: list[QuotationItemResponse]
    start_date: datetime | None
    end_date: datetime | None
    duration_days: int
    total_amount: float
    status: str
    client_name: str
    client_email: str
    client_id: str | None = None
    client_company: str = ""
    seller_id: str | None = None
    company_id: str | None = None
    campaign_id: str | None = None
    proposal_id: str | None = None
    valid_until: datetime | None = None
    created: datetime | None = None
    updated: datetime | None = None


class QuotationSignResponse(BaseModel):
    """Documents created when a quotation is signed."""

    quotation_id: str
    collectible_ids: list[str]
    booking_id: str


def item_fields(items: list[QuotationItemRequest]) -> list[dict[str, Any]]:
    """Item requests as plain dicts for the service update path."""
    return [item.model_dump() for item in items]
