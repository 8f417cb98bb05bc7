"""Read-only access to ``iboard_users`` profiles."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import CurrentUser
from app.infrastructure.firebase.collections import COLLECTION_USERS
from app.infrastructure.firebase.repositories.base import FirestoreRepository, as_str


def _display_name(data: dict[str, Any]) -> str:
    name = as_str(data.get("displayName") or data.get("display_name"))
    if name:
        return name
    parts = [as_str(data.get("first_name")), as_str(data.get("last_name"))]
    return " ".join(p for p in parts if p)


class FirestoreUserRepository(FirestoreRepository[CurrentUser]):
    collection_name = COLLECTION_USERS
    resource_type = "User"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> CurrentUser:
        roles = data.get("roles") or []
        return CurrentUser(
            uid=doc_id,
            email=data.get("email"),
            display_name=_display_name(data),
            company_id=data.get("company_id"),
            roles=[str(r) for r in roles] if isinstance(roles, list) else [],
        )
