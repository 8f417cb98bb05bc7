"""Firebase Storage backend over the Google Cloud Storage JSON API (httpx + google-auth).

Objects get a ``firebaseStorageDownloadTokens`` metadata entry so the returned
URL works the same way as URLs handed out by the Firebase web SDK.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from urllib.parse import quote

import httpx

from app.application.interfaces.services import StoredObject
from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageQuotaExceededError,
    StorageUploadError,
)
from app.infrastructure.firebase._rest_client import _get_access_token

logger = logging.getLogger(__name__)

_STORAGE_SCOPE = "https://www.googleapis.com/auth/devstorage.read_write"
_UPLOAD_BASE = "https://storage.googleapis.com/upload/storage/v1/b"
_API_BASE = "https://storage.googleapis.com/storage/v1/b"
_DOWNLOAD_BASE = "https://firebasestorage.googleapis.com/v0/b"


def download_url(bucket: str, path: str, token: str) -> str:
    """Firebase-style public URL for an object with a download token."""
    return f"{_DOWNLOAD_BASE}/{bucket}/o/{quote(path, safe='')}?alt=media&token={token}"


class FirebaseStorageService:
    """Upload, fetch and delete objects in the project's Firebase Storage bucket."""

    def __init__(
        self,
        bucket: str,
        credentials,
        http_client: httpx.AsyncClient,
        max_size: int | None = None,
    ) -> None:
        self._bucket = bucket
        self._credentials = credentials
        self._http = http_client
        self._max_size = max_size

    async def _headers(self) -> dict[str, str]:
        token = await asyncio.to_thread(_get_access_token, self._credentials)
        return {"Authorization": f"Bearer {token}"}

    def _object_url(self, path: str) -> str:
        return f"{_API_BASE}/{self._bucket}/o/{quote(path, safe='')}"

    async def upload(self, data: bytes, path: str, content_type: str) -> StoredObject:
        if self._max_size is not None and len(data) > self._max_size:
            raise StorageQuotaExceededError(len(data), self._max_size)
        token = str(uuid.uuid4())
        headers = await self._headers()
        try:
            resp = await self._http.post(
                f"{_UPLOAD_BASE}/{self._bucket}/o",
                params={"uploadType": "media", "name": path},
                content=data,
                headers={**headers, "Content-Type": content_type},
            )
            resp.raise_for_status()
            meta = await self._http.patch(
                self._object_url(path),
                json={"metadata": {"firebaseStorageDownloadTokens": token}},
                headers=headers,
            )
            meta.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageUploadError(path, str(e)) from e
        logger.debug("Uploaded %s (%d bytes) to %s", path, len(data), self._bucket)
        return StoredObject(
            path=path,
            url=download_url(self._bucket, path, token),
            size=len(data),
            content_type=content_type,
        )

    async def download(self, path: str) -> bytes:
        try:
            resp = await self._http.get(
                self._object_url(path), params={"alt": "media"}, headers=await self._headers()
            )
        except httpx.HTTPError as e:
            raise StorageDownloadError(path, str(e)) from e
        if resp.status_code == 404:
            raise StorageNotFoundError(path)
        if resp.status_code != 200:
            raise StorageDownloadError(path, f"HTTP {resp.status_code}")
        return resp.content

    async def delete(self, path: str) -> bool:
        try:
            resp = await self._http.delete(self._object_url(path), headers=await self._headers())
        except httpx.HTTPError as e:
            raise StorageDeleteError(path, str(e)) from e
        if resp.status_code == 404:
            return False
        if resp.status_code not in (200, 204):
            raise StorageDeleteError(path, f"HTTP {resp.status_code}")
        return True

    async def exists(self, path: str) -> bool:
        resp = await self._http.get(self._object_url(path), headers=await self._headers())
        return resp.status_code == 200
