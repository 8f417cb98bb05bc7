"""Outbound email log (``emails``)."""

from __future__ import annotations

from typing import Any

from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import COLLECTION_EMAILS
from app.infrastructure.firebase.repositories.base import FirestoreRepository


class FirestoreEmailRecordRepository(FirestoreRepository[dict[str, Any]]):
    collection_name = COLLECTION_EMAILS
    resource_type = "Email"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return {"id": doc_id, **data}

    async def record(self, data: dict[str, Any], sent: bool) -> str:
        """Log an email with status sent/failed; sentAt is set only when sent."""
        payload = {**data, "status": "sent" if sent else "failed"}
        if sent:
            payload["sentAt"] = SERVER_TIMESTAMP
        return await self._insert(payload)
