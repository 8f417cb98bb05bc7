"""Firestore-backed product (billboard site) repository."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.application.dtos.product import ProductCreate, ProductResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import COLLECTION_PRODUCTS
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime


def first_media_url(data: dict[str, Any]) -> str | None:
    """URL of the first media entry of a product, if any."""
    media = data.get("media") or []
    if media and isinstance(media[0], dict):
        return media[0].get("url") or None
    return None


class FirestoreProductRepository(FirestoreRepository[ProductResult]):
    """Products live in ``products`` and are soft-deleted."""

    collection_name = COLLECTION_PRODUCTS
    resource_type = "Product"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ProductResult:
        specs = data.get("specs_rental") or {}
        cms = data.get("cms") or {}
        return ProductResult(
            id=doc_id,
            name=as_str(data.get("name")),
            company_id=as_str(data.get("company_id")),
            price=as_float(data.get("price")),
            location=as_str(specs.get("location") or data.get("location")),
            site_code=as_str(data.get("site_code")),
            type=as_str(data.get("type")),
            description=as_str(data.get("description")),
            status=as_str(data.get("status")),
            active=bool(data.get("active", True)),
            deleted=bool(data.get("deleted", False)),
            position=as_int(data.get("position")),
            media_url=first_media_url(data),
            player_id=cms.get("player_id") or None,
            seller_id=data.get("seller_id"),
            specs_rental=specs,
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(self, data: ProductCreate) -> ProductResult:
        """Create a product with status PENDING, position 0, active and not deleted."""
        payload: dict[str, Any] = {
            "name": data.name,
            "company_id": data.company_id,
            "price": data.price,
            "description": data.description,
            "type": data.type,
            "site_code": data.site_code,
            "seller_id": data.seller_id,
            "specs_rental": data.specs_rental,
            "media": data.media,
            "status": "PENDING",
            "position": 0,
            "active": True,
            "deleted": False,
        }
        if data.player_id:
            payload["cms"] = {"player_id": data.player_id}
        doc_id = await self._insert(payload)
        created = await self.get_by_id(doc_id)
        if created is None:
            raise ResourceNotFoundException(self.resource_type, doc_id)
        return created

    async def update(self, product_id: str, fields: dict[str, Any]) -> None:
        await self._patch(product_id, fields)

    async def soft_delete(self, product_id: str) -> None:
        await self._patch(product_id, {"deleted": True, "date_deleted": SERVER_TIMESTAMP})

    def _company_query(self, company_id: str, active: bool | None):
        q = self._coll.where("company_id", "==", company_id).where("deleted", "==", False)
        if active is not None:
            q = q.where("active", "==", active)
        return q

    async def page_by_company(
        self,
        company_id: str,
        page_size: int,
        start_after_id: str | None = None,
        active: bool | None = None,
    ) -> Page[ProductResult]:
        """Products of a company ordered by name."""
        q = self._company_query(company_id, active).order_by("name")
        return await self._page(q, page_size, start_after_id)

    async def count_by_company(self, company_id: str, active: bool | None = None) -> int:
        return await self._company_query(company_id, active).count()
