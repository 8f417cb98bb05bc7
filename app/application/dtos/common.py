"""Shared DTOs: cursor pages and the signed-in user."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Page[T]:
    """One page of a cursor-paginated query.

    last_doc_id is the cursor for the next page; has_more is True when the
    page came back full (the next page may still be empty).
    """

    items: list[T]
    last_doc_id: str | None
    has_more: bool
    page_number: int = 1

    @classmethod
    def empty(cls, page_number: int = 1) -> "Page[T]":
        return cls(items=[], last_doc_id=None, has_more=False, page_number=page_number)


@dataclass(frozen=True)
class CurrentUser:
    """Signed-in user resolved from a Firebase ID token and the iboard_users profile."""

    uid: str
    email: str | None = None
    display_name: str = ""
    company_id: str | None = None
    roles: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CompanyResult:
    """Company profile used on document headers."""

    id: str
    name: str
    address: str
    phone: str = ""
    email: str = ""
    logo_url: str | None = None
