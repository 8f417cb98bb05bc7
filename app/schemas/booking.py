"""Booking and collectible API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    product_id: str
    product_name: str
    quotation_id: str
    status: str
    type: str
    start_date: datetime | None
    end_date: datetime | None
    total_cost: float
    seller_id: str = ""
    client: dict[str, Any] = Field(default_factory=dict)
    cost_details: dict[str, Any] = Field(default_factory=dict)
    payment_method: str = ""
    created: datetime | None = None


class CollectibleUpdate(BaseModel):
    """Request body for updating a collectible (partial)."""

    status: Literal["pending", "collected", "overdue"] | None = None
    mode_of_payment: str | None = Field(default=None, max_length=64)
    or_no: str | None = Field(default=None, max_length=64)
    bi_no: str | None = Field(default=None, max_length=64)
    invoice_no: str | None = Field(default=None, max_length=64)
    collection_date: datetime | None = None
    net_amount: float | None = Field(default=None, ge=0)
    total_amount: float | None = Field(default=None, ge=0)


class CollectibleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_name: str
    company_id: str
    type: str
    net_amount: float
    total_amount: float
    invoice_no: str
    or_no: str
    bi_no: str
    booking_no: str
    mode_of_payment: str
    status: str
    covered_period: str
    site: str
    quotation_id: str | None = None
    quotation_number: str | None = None
    product_id: str | None = None
    product_name: str = ""
    collection_date: datetime | None = None
    created: datetime | None = None
    updated: datetime | None = None
