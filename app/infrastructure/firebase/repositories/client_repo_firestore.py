"""Firestore-backed client repository (``client_db``)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.client import ClientCreate, ClientResult
from app.application.dtos.common import Page
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase.collections import COLLECTION_CLIENTS
from app.infrastructure.firebase.repositories.base import FirestoreRepository, as_str
from app.shared.utils.datetime import coerce_datetime

# DTO attribute -> stored field, where they differ
_FIELD_NAMES = {"zip_code": "zipCode", "uploaded_by": "uploadedBy", "uploaded_by_name": "uploadedByName"}


def to_client_fields(values: dict[str, Any]) -> dict[str, Any]:
    """Map DTO attribute names to the stored field names."""
    return {_FIELD_NAMES.get(k, k): v for k, v in values.items()}


class FirestoreClientRepository(FirestoreRepository[ClientResult]):
    """Clients are hard-deleted; listing is ordered by name."""

    collection_name = COLLECTION_CLIENTS
    resource_type = "Client"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ClientResult:
        return ClientResult(
            id=doc_id,
            name=as_str(data.get("name")),
            email=as_str(data.get("email")),
            phone=as_str(data.get("phone")),
            company=as_str(data.get("company")),
            company_id=as_str(data.get("company_id")),
            status=as_str(data.get("status")) or "lead",
            designation=as_str(data.get("designation")),
            address=as_str(data.get("address")),
            city=as_str(data.get("city")),
            state=as_str(data.get("state")),
            zip_code=as_str(data.get("zipCode")),
            industry=as_str(data.get("industry")),
            notes=as_str(data.get("notes")),
            uploaded_by=as_str(data.get("uploadedBy")),
            uploaded_by_name=as_str(data.get("uploadedByName")),
            created=coerce_datetime(data.get("created")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def create(
        self, data: ClientCreate, uploaded_by: str, uploaded_by_name: str = ""
    ) -> ClientResult:
        payload = to_client_fields({
            "name": data.name,
            "email": data.email,
            "phone": data.phone,
            "company": data.company,
            "company_id": data.company_id,
            "status": data.status,
            "designation": data.designation,
            "address": data.address,
            "city": data.city,
            "state": data.state,
            "zip_code": data.zip_code,
            "industry": data.industry,
            "notes": data.notes,
            "uploaded_by": uploaded_by,
            "uploaded_by_name": uploaded_by_name,
        })
        doc_id = await self._insert(payload)
        created = await self.get_by_id(doc_id)
        if created is None:
            raise ResourceNotFoundException(self.resource_type, doc_id)
        return created

    async def update(self, client_id: str, fields: dict[str, Any]) -> None:
        await self._patch(client_id, to_client_fields(fields))

    async def delete(self, client_id: str) -> None:
        await self._coll.document(client_id).delete()

    async def get_by_email(self, email: str) -> ClientResult | None:
        snapshots = await self._coll.where("email", "==", email).limit(1).get()
        return self._snapshot_result(snapshots[0]) if snapshots else None

    def _filtered(self, status: str | None, uploaded_by: str | None, company_id: str | None):
        q = self._coll.order_by("name")
        if company_id:
            q = q.where("company_id", "==", company_id)
        if status:
            q = q.where("status", "==", status)
        if uploaded_by:
            q = q.where("uploadedBy", "==", uploaded_by)
        return q

    async def page(
        self,
        page_size: int,
        start_after_id: str | None = None,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> Page[ClientResult]:
        return await self._page(
            self._filtered(status, uploaded_by, company_id), page_size, start_after_id
        )

    async def list_all(
        self,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> list[ClientResult]:
        return await self._all(self._filtered(status, uploaded_by, company_id))

    async def count(
        self,
        *,
        status: str | None = None,
        uploaded_by: str | None = None,
        company_id: str | None = None,
    ) -> int:
        return await self._filtered(status, uploaded_by, company_id).count()
