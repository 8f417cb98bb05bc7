"""DTOs for client records."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ClientResult:
    """Client read-model."""

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


@dataclass(frozen=True)
class ClientCreate:
    """Input for creating a client."""

    name: str
    email: str
    phone: str
    company: str
    status: str = "lead"
    company_id: str = ""
    designation: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    industry: str = ""
    notes: str = ""
