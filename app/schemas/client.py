"""Client API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ClientStatusLiteral = Literal["active", "inactive", "lead"]


class ClientCreateRequest(BaseModel):
    """Request body for creating a client."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    phone: str = Field(default="", max_length=64)
    company: str = Field(default="", max_length=255)
    status: ClientStatusLiteral = "lead"
    designation: str = Field(default="", max_length=255)
    address: str = Field(default="", max_length=500)
    city: str = Field(default="", max_length=128)
    state: str = Field(default="", max_length=128)
    zip_code: str = Field(default="", max_length=32)
    industry: str = Field(default="", max_length=128)
    notes: str = Field(default="", max_length=5000)


class ClientUpdate(BaseModel):
    """Request body for updating a client (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    phone: str | None = Field(default=None, max_length=64)
    company: str | None = Field(default=None, max_length=255)
    status: ClientStatusLiteral | None = None
    designation: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=128)
    state: str | None = Field(default=None, max_length=128)
    zip_code: str | None = Field(default=None, max_length=32)
    industry: str | None = Field(default=None, max_length=128)
    notes: str | None = Field(default=None, max_length=5000)


class ClientResponse(BaseModel):
    """Client record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    company: str
    company_id: str
    status: str
    designation: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    industry: str = ""
    notes: str = ""
    uploaded_by: str = ""
    uploaded_by_name: str = ""
    created: datetime | None = None
    updated: datetime | None = None
