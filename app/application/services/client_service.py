"""Client service: CRUD, lookup by email, and searchable pages."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from app.application.dtos.client import ClientCreate, ClientResult
from app.application.dtos.common import CurrentUser, Page
from app.application.interfaces.repositories import IClientRepository
from app.application.services.access import ensure_company_access
from app.application.services.pagination import CursorPaginator, PageCacheRegistry
from app.domain.enums import ClientStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.sanitization import EmailBodySanitizer

logger = logging.getLogger(__name__)

CACHE_KEY = "clients"


def _matches(client: ClientResult, needle: str) -> bool:
    fields = (client.name, client.email, client.company, client.phone)
    return any(needle in (f or "").lower() for f in fields)


class ClientService:
    def __init__(self, client_repo: IClientRepository, page_caches: PageCacheRegistry) -> None:
        self._repo = client_repo
        self._page_caches = page_caches

    @staticmethod
    def _validate(fields: dict[str, Any]) -> None:
        email = fields.get("email")
        if email is not None and not EmailBodySanitizer.is_valid_email(email):
            raise ValidationException("Invalid email address", field="email")
        status = fields.get("status")
        if status is not None and status not in ClientStatus.values():
            raise ValidationException(
                f"Invalid status. Allowed: {', '.join(ClientStatus.values())}",
                field="status",
            )

    async def create(self, data: ClientCreate, user: CurrentUser) -> ClientResult:
        if not data.name.strip():
            raise ValidationException("Client name is required", field="name")
        self._validate({"email": data.email, "status": data.status})
        if not data.company_id and user.company_id:
            data = replace(data, company_id=user.company_id)
        client = await self._repo.create(data, user.uid, user.display_name)
        self._page_caches.invalidate(CACHE_KEY)
        logger.info("Client %s created by %s", client.id, user.uid)
        return client

    async def get(
        self, client_id: str, user: CurrentUser | None = None, action: str = "read"
    ) -> ClientResult:
        client = await self._repo.get_by_id(client_id)
        if client is None:
            raise ResourceNotFoundException("Client", client_id)
        if user is not None:
            ensure_company_access("client", client_id, client.company_id, user, action)
        return client

    async def get_by_email(self, email: str) -> ClientResult | None:
        return await self._repo.get_by_email(email)

    async def update(
        self, client_id: str, fields: dict[str, Any], user: CurrentUser | None = None
    ) -> ClientResult:
        self._validate(fields)
        if user is not None:
            await self.get(client_id, user, "update")
        await self._repo.update(client_id, fields)
        self._page_caches.invalidate(CACHE_KEY)
        return await self.get(client_id)

    async def delete(self, client_id: str, user: CurrentUser | None = None) -> None:
        await self.get(client_id, user, "delete")
        await self._repo.delete(client_id)
        self._page_caches.invalidate(CACHE_KEY)

    async def list_page(
        self,
        page: int,
        page_size: int,
        *,
        company_id: str | None = None,
        status: str | None = None,
        uploaded_by: str | None = None,
        search: str | None = None,
    ) -> Page[ClientResult]:
        """Clients ordered by name; search matches name, email, company or phone."""
        needle = (search or "").strip().lower()
        if needle:
            # search runs over the whole filtered set, then is paged in memory
            everything = await self._repo.list_all(
                status=status, uploaded_by=uploaded_by, company_id=company_id
            )
            matched = [c for c in everything if _matches(c, needle)]
            start = (page - 1) * page_size
            items = matched[start : start + page_size]
            return Page(
                items=items,
                last_doc_id=items[-1].id if items else None,
                has_more=start + page_size < len(matched),
                page_number=page,
            )

        async def fetch(size: int, cursor: str | None) -> Page[ClientResult]:
            return await self._repo.page(
                size, cursor, status=status, uploaded_by=uploaded_by, company_id=company_id
            )

        cache = self._page_caches.cache_for(
            (CACHE_KEY, company_id, status, uploaded_by, page_size)
        )
        return await CursorPaginator(fetch, page_size, cache).get_page(page)

    async def count(
        self,
        *,
        company_id: str | None = None,
        status: str | None = None,
        uploaded_by: str | None = None,
        search: str | None = None,
    ) -> int:
        """Server-side count, unless a search term forces a client-side count."""
        needle = (search or "").strip().lower()
        if not needle:
            return await self._repo.count(
                status=status, uploaded_by=uploaded_by, company_id=company_id
            )
        everything = await self._repo.list_all(
            status=status, uploaded_by=uploaded_by, company_id=company_id
        )
        return sum(1 for c in everything if _matches(c, needle))
