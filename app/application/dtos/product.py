"""DTOs for billboard sites (products) and LED screen schedules."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ProductResult:
    """Product (billboard site) read-model."""

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
    deleted: bool
    position: int
    media_url: str | None = None
    player_id: str | None = None
    seller_id: str | None = None
    specs_rental: dict[str, Any] = field(default_factory=dict)
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class ProductCreate:
    """Input for creating a product."""

    name: str
    company_id: str
    price: float
    description: str = ""
    type: str = "RENTAL"
    site_code: str = ""
    seller_id: str | None = None
    specs_rental: dict[str, Any] = field(default_factory=dict)
    media: list[dict[str, Any]] = field(default_factory=list)
    player_id: str | None = None


@dataclass(frozen=True)
class ScreenScheduleResult:
    """One content spot on an LED site."""

    id: str
    product_id: str
    spot_number: int
    media: str
    status: str
    active: bool
    title: str = ""
    duration: int | None = None
    company_id: str | None = None
    created: datetime | None = None
