"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.

Plain overwrites use PATCH on the document. Partial updates, creates and
writes carrying SERVER_TIMESTAMP go through ``documents:commit`` so that the
field values and the server-time transform land in one atomic write.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_fields,
    encode_document,
    field_path,
    query_field_path,
    split_transforms,
)
from app.shared.utils.generators import generate_cuid

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict, scopes: list[str] | None = None):
    """Return google.oauth2.service_account.Credentials for Firestore (or other scopes)."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=scopes or [_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentExistsError(Exception):
    """Raised when a create hits 409 (document ID already exists)."""


class DocumentNotFoundError(Exception):
    """Raised when an update or batch targets a document that does not exist."""


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError("Document already exists")
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _write(
    name: str,
    data: dict[str, Any],
    *,
    masked: bool,
    exists: bool | None = None,
) -> dict[str, Any]:
    """Build one Write for documents:commit.

    masked=True only touches the given fields (update / merge); otherwise the
    document is replaced. SERVER_TIMESTAMP and Increment values become field
    transforms applied by the server in the same commit.
    """
    values, transforms = split_transforms(data)
    write: dict[str, Any] = {"update": {"name": name, **encode_document(values)}}
    if masked:
        write["updateMask"] = {"fieldPaths": [field_path(k) for k in values]}
    if transforms:
        write["updateTransforms"] = transforms
    if exists is not None:
        write["currentDocument"] = {"exists": exists}
    return write


def _lookup(data: dict, dotted: str) -> Any:
    if dotted in data:
        return data[dotted]
    cur: Any = data
    for part in dotted.split("."):
        if not isinstance(cur, dict):
            return None
        cur = cur.get(part)
    return cur


class DocumentSnapshot:
    """Snapshot of a document (id + data, plus its full resource path)."""

    def __init__(self, id_: str, data: dict, path: str | None = None):
        self.id = id_
        self._data = data
        self.path = path

    def to_dict(self) -> dict:
        return self._data

    def get(self, field: str, default: Any = None) -> Any:
        """Return a (dotted) field value."""
        value = _lookup(self._data, field)
        return default if value is None else value


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    @property
    def path(self) -> str:
        return self._path

    async def set(self, data: dict[str, Any], merge: bool = False) -> None:
        """Create or overwrite the document; merge=True only writes the given fields."""
        _, transforms = split_transforms(data)
        if merge or transforms:
            await self._client.commit([_write(self._path, data, masked=merge)])
            return
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Write only the given fields of an existing document (single commit).

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        result = await self._client.commit(
            [_write(self._path, data, masked=True, exists=True)]
        )
        if result is None:
            raise DocumentNotFoundError(f"Document not found: {self.id}")

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{_BASE}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_fields(out.get("fields")), self._path)

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains_any": "ARRAY_CONTAINS_ANY",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

_DIRECTIONS: dict[str, str] = {
    "asc": "ASCENDING",
    "ascending": "ASCENDING",
    "desc": "DESCENDING",
    "descending": "DESCENDING",
}


class _Query:
    """Fluent query builder for a collection; runs via runQuery.

    Filters are ANDed. start_after() takes a snapshot from a previous page and
    adds the implicit ``__name__`` ordering so the cursor is unambiguous.
    """

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._orders: list[tuple[str, str]] = []
        self._cursor: DocumentSnapshot | None = None
        self._offset: int = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "_Query":
        self._filters.append((field, _OP_MAP.get(op, op), value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._orders.append((field, _DIRECTIONS.get(direction.lower(), direction)))
        return self

    def start_after(self, snapshot: DocumentSnapshot | None) -> "_Query":
        self._cursor = snapshot
        return self

    def offset(self, n: int) -> "_Query":
        self._offset = n
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def _where_clause(self) -> dict[str, Any] | None:
        clauses: list[dict[str, Any]] = []
        for field, op, value in self._filters:
            if value is None and op in ("EQUAL", "NOT_EQUAL"):
                clauses.append({
                    "unaryFilter": {
                        "field": {"fieldPath": query_field_path(field)},
                        "op": "IS_NULL" if op == "EQUAL" else "IS_NOT_NULL",
                    }
                })
                continue
            clauses.append({
                "fieldFilter": {
                    "field": {"fieldPath": query_field_path(field)},
                    "op": op,
                    "value": _encode_value(value),
                }
            })
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return {"compositeFilter": {"op": "AND", "filters": clauses}}

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        where = self._where_clause()
        if where is not None:
            structured["where"] = where
        orders = list(self._orders)
        if self._cursor is not None:
            if not any(f == "__name__" for f, _ in orders):
                last_direction = orders[-1][1] if orders else "ASCENDING"
                orders.append(("__name__", last_direction))
            values = []
            for field, _ in orders:
                if field == "__name__":
                    values.append({"referenceValue": self._cursor.path})
                else:
                    values.append(_encode_value(_lookup(self._cursor.to_dict(), field)))
            structured["startAt"] = {"values": values, "before": False}
        if orders:
            structured["orderBy"] = [
                {"field": {"fieldPath": query_field_path(f)}, "direction": d} for f, d in orders
            ]
        if self._offset:
            structured["offset"] = self._offset
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        url = f"{_BASE}/{self._parent}:runQuery"
        body = {"structuredQuery": self._structured_query()}
        resp = await _request_async(
            self._client._http,
            url,
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            doc_id = name.split("/")[-1] if name else ""
            yield DocumentSnapshot(doc_id, decode_fields(doc.get("fields")), name)

    async def get(self) -> list[DocumentSnapshot]:
        """Execute the query and return all snapshots as a list."""
        return [snapshot async for snapshot in self.stream()]

    async def count(self) -> int:
        """Count matching documents server-side (aggregation query)."""
        structured = self._structured_query()
        structured.pop("orderBy", None)
        structured.pop("startAt", None)
        url = f"{_BASE}/{self._parent}:runAggregationQuery"
        body = {
            "structuredAggregationQuery": {
                "structuredQuery": structured,
                "aggregations": [{"alias": "total", "count": {}}],
            }
        }
        resp = await _request_async(
            self._client._http,
            url,
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            fields = item.get("result", {}).get("aggregateFields", {})
            if "total" in fields:
                return int(fields["total"].get("integerValue", 0))
        return 0


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> DocumentReference:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        ref = self.document(document_id)
        await self._client.commit([_write(ref.path, data, masked=False, exists=False)])
        return ref

    async def add(self, data: dict[str, Any]) -> DocumentReference:
        """Create a document with a generated ID and return its reference."""
        return await self.create(generate_cuid(), data)

    def _query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        return _Query(self._client, parent, self.id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where()/.order_by()/.limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        return self._query().order_by(field, direction)

    def limit(self, n: int) -> _Query:
        return self._query().limit(n)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Yield every document in the collection."""
        async for snapshot in self._query().stream():
            yield snapshot

    async def count(self) -> int:
        return await self._query().count()


class WriteBatch:
    """Stage set/create/update/delete writes and apply them in one commit."""

    def __init__(self, client: "FirestoreRESTClient") -> None:
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def set(self, ref: DocumentReference, data: dict[str, Any], merge: bool = False) -> "WriteBatch":
        self._writes.append(_write(ref.path, data, masked=merge))
        return self

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        self._writes.append(_write(ref.path, data, masked=False, exists=False))
        return self

    def update(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        self._writes.append(_write(ref.path, data, masked=True, exists=True))
        return self

    def delete(self, ref: DocumentReference) -> "WriteBatch":
        self._writes.append({"delete": ref.path})
        return self

    async def commit(self) -> None:
        """Apply all staged writes atomically.

        Raises:
            DocumentNotFoundError: If an update targets a missing document.
            DocumentExistsError: If a create targets an existing document.
        """
        if not self._writes:
            return
        writes, self._writes = self._writes, []
        result = await self._client.commit(writes)
        if result is None:
            raise DocumentNotFoundError("A document updated in the batch does not exist")


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def commit(self, writes: list[dict[str, Any]]) -> dict | None:
        """POST documents:commit. Returns None when a precondition target is missing (404)."""
        return await _request_async(
            self._http,
            f"{_BASE}/{self._prefix}:commit",
            method="POST",
            body={"writes": writes},
            access_token=await self.get_token(),
        )
