"""Read-only access to ``companies`` (document headers)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import CompanyResult
from app.infrastructure.firebase.collections import COLLECTION_COMPANIES
from app.infrastructure.firebase.repositories.base import FirestoreRepository, as_str
from app.shared.utils.formatting import format_company_address


class FirestoreCompanyRepository(FirestoreRepository[CompanyResult]):
    collection_name = COLLECTION_COMPANIES
    resource_type = "Company"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> CompanyResult:
        return CompanyResult(
            id=doc_id,
            name=as_str(data.get("name") or data.get("company_name")),
            address=format_company_address(data),
            phone=as_str(data.get("phone")),
            email=as_str(data.get("email")),
            logo_url=data.get("photo_url") or data.get("logo") or None,
        )
