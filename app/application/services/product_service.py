"""Product (billboard site) service: CRUD plus cached, searchable pages."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.product import ProductCreate, ProductResult
from app.application.interfaces.repositories import IProductRepository
from app.application.services.access import ensure_company_access
from app.application.services.pagination import CursorPaginator, PageCacheRegistry
from app.domain.exceptions import ResourceNotFoundException, ValidationException

CACHE_KEY = "products"


def _matches(product: ProductResult, needle: str) -> bool:
    haystacks = (product.name, product.location, product.description)
    return any(needle in (h or "").lower() for h in haystacks)


class ProductService:
    """Products of a company. Writes invalidate the cached pages."""

    def __init__(self, product_repo: IProductRepository, page_caches: PageCacheRegistry) -> None:
        self._repo = product_repo
        self._page_caches = page_caches

    async def create(self, data: ProductCreate) -> ProductResult:
        if not data.name.strip():
            raise ValidationException("Product name is required", field="name")
        if data.price < 0:
            raise ValidationException("Price cannot be negative", field="price")
        product = await self._repo.create(data)
        self._page_caches.invalidate(CACHE_KEY)
        return product

    async def get(self, product_id: str) -> ProductResult:
        product = await self._repo.get_by_id(product_id)
        if product is None or product.deleted:
            raise ResourceNotFoundException("Product", product_id)
        return product

    async def update(
        self, product_id: str, fields: dict[str, Any], user: CurrentUser | None = None
    ) -> ProductResult:
        if "price" in fields and fields["price"] is not None and fields["price"] < 0:
            raise ValidationException("Price cannot be negative", field="price")
        if user is not None:
            product = await self.get(product_id)
            ensure_company_access("product", product_id, product.company_id, user, "update")
        await self._repo.update(product_id, fields)
        self._page_caches.invalidate(CACHE_KEY)
        return await self.get(product_id)

    async def soft_delete(self, product_id: str, user: CurrentUser | None = None) -> None:
        product = await self.get(product_id)
        if user is not None:
            ensure_company_access("product", product_id, product.company_id, user, "delete")
        await self._repo.soft_delete(product_id)
        self._page_caches.invalidate(CACHE_KEY)

    async def list_page(
        self,
        company_id: str,
        page: int,
        page_size: int,
        active: bool | None = None,
        search: str | None = None,
    ) -> Page[ProductResult]:
        """Page N of a company's products ordered by name.

        ``search`` filters the fetched page (name, location, description);
        the cursor and has_more stay those of the unfiltered page.
        """

        async def fetch(size: int, cursor: str | None) -> Page[ProductResult]:
            return await self._repo.page_by_company(company_id, size, cursor, active)

        cache = self._page_caches.cache_for((CACHE_KEY, company_id, active, page_size))
        result = await CursorPaginator(fetch, page_size, cache).get_page(page)
        needle = (search or "").strip().lower()
        if not needle:
            return result
        return Page(
            items=[p for p in result.items if _matches(p, needle)],
            last_doc_id=result.last_doc_id,
            has_more=result.has_more,
            page_number=result.page_number,
        )

    async def count(self, company_id: str, active: bool | None = None) -> int:
        return await self._repo.count_by_company(company_id, active)
