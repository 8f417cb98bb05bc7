"""Shared API schemas: cursor pages, counts and action outcomes."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from app.application.dtos.common import Page

T = TypeVar("T", bound=BaseModel)


class PageResponse(BaseModel, Generic[T]):
    """One page of a cursor-paginated list.

    Pass last_doc_id back as ``start_after`` (or ask for page + 1) to continue.
    """

    items: list[T]
    page: int
    last_doc_id: str | None
    has_more: bool


def to_page_response(page: Page[Any], model: type[T]) -> PageResponse[T]:
    """Convert a service Page of DTOs into the response model for ``model``."""
    return PageResponse[model](  # type: ignore[valid-type]
        items=[model.model_validate(item) for item in page.items],
        page=page.page_number,
        last_doc_id=page.last_doc_id,
        has_more=page.has_more,
    )


class CountResponse(BaseModel):
    """Total number of matching documents."""

    count: int


class ActionOutcomeResponse(BaseModel):
    """Result of an action the UI reports with a toast (and optional redirect)."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str
    redirect_to: str | None = None
