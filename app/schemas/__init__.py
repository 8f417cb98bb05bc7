"""Pydantic request/response schemas for the API."""

from app.schemas.common import ActionOutcomeResponse, CountResponse, PageResponse
from app.schemas.health import HealthResponse

__all__ = [
    "ActionOutcomeResponse",
    "CountResponse",
    "HealthResponse",
    "PageResponse",
]
