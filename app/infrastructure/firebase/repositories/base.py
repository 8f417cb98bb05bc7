"""Base Firestore repository: snapshot lookup, cursor pages, stamped writes."""

from __future__ import annotations

from typing import Any

from app.application.dtos.common import Page
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import (
    DocumentNotFoundError,
    DocumentSnapshot,
    FirestoreRESTClient,
    _Query,
)
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP


class FirestoreRepository[ResultT]:
    """Generic repository over one collection.

    Subclasses set ``collection_name`` and ``resource_type`` and implement
    ``_to_result``. ``created_field``/``updated_field`` name the timestamp
    fields the collection uses (most use created/updated).
    """

    collection_name: str = ""
    resource_type: str = "Document"
    created_field: str = "created"
    updated_field: str = "updated"

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(self.collection_name)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ResultT:
        raise NotImplementedError

    def _snapshot_result(self, snapshot: DocumentSnapshot) -> ResultT:
        return self._to_result(snapshot.id, snapshot.to_dict())

    async def _get_snapshot(self, doc_id: str) -> DocumentSnapshot | None:
        if not doc_id:
            return None
        return await self._coll.document(doc_id).get()

    async def get_by_id(self, doc_id: str) -> ResultT | None:
        """Return the document as a DTO, or None."""
        snapshot = await self._get_snapshot(doc_id)
        if snapshot is None:
            return None
        return self._snapshot_result(snapshot)

    async def get_raw(self, doc_id: str) -> dict[str, Any] | None:
        """Return the stored fields as a plain dict (for PDF rendering)."""
        snapshot = await self._get_snapshot(doc_id)
        return None if snapshot is None else snapshot.to_dict()

    async def _insert(self, data: dict[str, Any], doc_id: str | None = None) -> str:
        """Create a document stamped with server created/updated; return its ID."""
        payload = {
            **data,
            self.created_field: SERVER_TIMESTAMP,
            self.updated_field: SERVER_TIMESTAMP,
        }
        if doc_id:
            ref = await self._coll.create(doc_id, payload)
        else:
            ref = await self._coll.add(payload)
        return ref.id

    async def _patch(self, doc_id: str, data: dict[str, Any]) -> None:
        """Update the given fields and stamp ``updated`` with the server time.

        Raises:
            ResourceNotFoundException: If the document does not exist.
        """
        try:
            await self._coll.document(doc_id).update(
                {**data, self.updated_field: SERVER_TIMESTAMP}
            )
        except DocumentNotFoundError:
            raise ResourceNotFoundException(self.resource_type, doc_id) from None

    async def _page(
        self,
        query: _Query,
        page_size: int,
        start_after_id: str | None = None,
    ) -> Page[ResultT]:
        """Run one cursor page of ``query``; has_more means the page came back full."""
        if start_after_id:
            cursor = await self._get_snapshot(start_after_id)
            if cursor is None:
                return Page.empty()
            query = query.start_after(cursor)
        snapshots = await query.limit(page_size).get()
        items = [self._snapshot_result(s) for s in snapshots]
        return Page(
            items=items,
            last_doc_id=snapshots[-1].id if snapshots else None,
            has_more=len(snapshots) == page_size,
        )

    async def _all(self, query: _Query) -> list[ResultT]:
        return [self._snapshot_result(s) async for s in query.stream()]


def as_float(value: Any) -> float:
    """Read a stored number that may be missing, a string, or an int."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def as_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_str(value: Any) -> str:
    return "" if value is None else str(value)


def non_blank(data: dict[str, Any]) -> dict[str, Any]:
    """Drop None values and blank strings (fields stored only when provided)."""
    out: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        out[key] = value
    return out
