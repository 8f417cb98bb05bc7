"""Product (billboard site) and screen schedule API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProductCreateRequest(BaseModel):
    """Request body for creating a site. company_id defaults to the caller's company."""

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0, description="Monthly rental rate")
    description: str = Field(default="", max_length=5000)
    type: str = Field(default="RENTAL", max_length=32)
    site_code: str = Field(default="", max_length=64)
    seller_id: str | None = None
    specs_rental: dict[str, Any] = Field(default_factory=dict)
    media: list[dict[str, Any]] = Field(default_factory=list)
    player_id: str | None = Field(default=None, description="LED player ID in the vendor CMS")


class ProductUpdate(BaseModel):
    """Request body for updating a site (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, ge=0)
    description: str | None = Field(default=None, max_length=5000)
    type: str | None = Field(default=None, max_length=32)
    site_code: str | None = Field(default=None, max_length=64)
    status: str | None = Field(default=None, max_length=32)
    active: bool | None = None
    position: int | None = None
    specs_rental: dict[str, Any] | None = None
    media: list[dict[str, Any]] | None = None


class ProductResponse(BaseModel):
    """Site as listed in inventory."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company_id: str
    price: float
    location: str
    site_code: str
    type: str
    description: str
    status: str
    active: bool
    position: int
    media_url: str | None = None
    player_id: str | None = None
    seller_id: str | None = None
    specs_rental: dict[str, Any] = Field(default_factory=dict)
    created: datetime | None = None
    updated: datetime | None = None


class ScreenScheduleCreateRequest(BaseModel):
    """Request body for adding a content spot to an LED site."""

    spot_number: int = Field(..., ge=1)
    media: str = Field(..., min_length=1, description="Media URL shown in the spot")
    title: str = Field(default="", max_length=255)
    duration: int | None = Field(default=None, ge=1, description="Seconds on screen")


class ScreenScheduleResponse(BaseModel):
    """One content spot on an LED site."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    spot_number: int
    media: str
    status: str
    active: bool
    title: str = ""
    duration: int | None = None
    created: datetime | None = None
