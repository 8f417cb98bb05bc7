"""LED site control API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class LevelRequest(BaseModel):
    """Brightness or volume level; 0 means automatic brightness."""

    value: int = Field(..., ge=0, le=100)


class ControlResponse(BaseModel):
    """Vendor reply, passed through as received."""

    player_id: str
    result: dict[str, Any] = Field(default_factory=dict)


class ScreenshotResponse(BaseModel):
    player_id: str
    url: str | None = None
